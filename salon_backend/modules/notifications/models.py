# Supabase table: notifications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

notifications:
- id: bigint (primary key)
- user_id: uuid (foreign key to users.id, not null)
- title: text (not null)
- message: text (not null)
- type: text (nullable) - e.g., "appointment_reminder", "promotion"
- read: boolean (default: false)
- created_at: timestamp (default: now())

Ownership: the user_id stored on the row.
"""
