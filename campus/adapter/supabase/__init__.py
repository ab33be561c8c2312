"""Supabase identity provider adapter."""

from .client import (
    MockSupabaseIdentityClient,
    RealSupabaseIdentityClient,
    SupabaseIdentityClient,
)

__all__ = [
    "MockSupabaseIdentityClient",
    "RealSupabaseIdentityClient",
    "SupabaseIdentityClient",
]
