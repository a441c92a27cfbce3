# Supabase Auth
# Identity is handled by Supabase's built-in authentication system.
# The application role lives in app_metadata, which only the service role can write.

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.admin.update_user_by_id() - Set app_metadata.role (service role key)

Expected app_metadata:
- role: text - one of "administrator", "owner", "employee", "client"

public.users.id equals auth.users.id, so every user_id column in the salon
tables can be compared directly with the authenticated principal id.
"""
