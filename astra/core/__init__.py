"""Core domain logic: exception taxonomy and the document processing pipeline."""
