# Supabase table: reactions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

reactions:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- type: text (not null) - values: like, love, wow
- created_at: timestamp (default: now())
- unique constraint on (post_id, user_id, type)

A user may hold several types on the same post; each type toggles on its own.

Optional toggle function. When REACTION_TOGGLE_RPC names it, the service
toggles with a single call instead of read-then-write:

create or replace function toggle_reaction(p_post_id uuid, p_user_id uuid, p_type text)
returns boolean
language plpgsql
as $$
begin
  delete from reactions
   where post_id = p_post_id and user_id = p_user_id and type = p_type;
  if found then
    return false;
  end if;
  insert into reactions (post_id, user_id, type)
  values (p_post_id, p_user_id, p_type)
  on conflict (post_id, user_id, type) do nothing;
  return true;
end;
$$;
"""
