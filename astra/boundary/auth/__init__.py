"""Supabase Auth adapter."""

from astra.boundary.auth.supabase_auth import SupabaseAuthClient

__all__ = ["SupabaseAuthClient"]
