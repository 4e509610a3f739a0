"""Layered configuration for commitctx."""
