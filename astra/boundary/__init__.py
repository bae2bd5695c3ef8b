"""Boundary adapters: relational store, object store and Supabase Auth."""
