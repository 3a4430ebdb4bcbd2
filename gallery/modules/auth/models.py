# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration and password sign-in (auth.users table)
# - OAuth redirects (access/refresh token pair in the redirect fragment)
# - JWT token generation and validation
# - Session lifecycle events (SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED, ...)

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.sign_in_with_oauth() - Provider URL for an OAuth redirect
- auth.set_session() - Adopt the token pair returned by an OAuth redirect
- auth.get_user() - Get current user from JWT token
- auth.on_auth_state_change() - Subscribe to session events
- auth.admin.sign_out(jwt, "local") - Revoke one user's session by its JWT

The public users table is not managed by Supabase Auth. Every session this
service observes is reconciled against it (see users.service.ProfileService).
"""
