# Supabase table: users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id)
- username: text (nullable) - defaults to the email local part on first sign-in
- avatar_url: text (nullable)
- bio: text (nullable)
- created_at: timestamp (default: now())

Rows are created by ProfileService.ensure_profile the first time an identity
is seen and are never deleted by this service. The primary key is what keeps
two concurrent first sign-ins from producing two profiles.
"""
