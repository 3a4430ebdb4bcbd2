# Supabase table: posts, storage bucket: artworks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

posts:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null) - author
- title: text (not null)
- image_url: text (not null) - public URL in the storage bucket
- description: text (nullable)
- created_at: timestamp (default: now())

Storage:
- bucket named by STORAGE_BUCKET (default: artworks), public read
- object key: "{user_id}-{epoch millis}.{extension}"
"""
