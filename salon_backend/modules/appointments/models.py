# Supabase tables: appointments, clients, employees
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

clients:
- id: bigint (primary key)
- user_id: uuid (foreign key to users.id, not null)

employees:
- id: bigint (primary key)
- user_id: uuid (foreign key to users.id, not null)

appointments:
- id: bigint (primary key)
- client_id: bigint (foreign key to clients.id, not null)
- employee_id: bigint (foreign key to employees.id, not null)
- status_id: bigint (foreign key to appointment_statuses.id, nullable)
- starts_at: timestamp (not null)
- notes: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Ownership: the client's user and the assigned employee's user.
"""
