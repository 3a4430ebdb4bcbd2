# Supabase table: blog
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

blog:
- id: uuid (primary key)
- title: text (not null)
- slug: text (unique, not null) - used in article URLs
- content: text (not null)
- created_at: timestamp (default: now())

Articles are written directly in Supabase; this service only reads them.
"""
