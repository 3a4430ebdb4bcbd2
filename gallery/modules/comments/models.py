# Supabase table: comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

comments:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- content: text (not null)
- created_at: timestamp (default: now())

Comments are append-only; there is no edit or delete path.
"""
