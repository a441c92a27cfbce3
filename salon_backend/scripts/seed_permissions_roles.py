"""
Seed Permissions and Roles Script
This script mirrors the in-code permission matrix into the roles, permissions
and role_permissions tables so admin tooling can display it.
The matrix in config remains the source of truth for authorization decisions.
Can be run manually or after each deploy.
"""

import sys
from salon_backend.config.permissions_config import get_permission_rows
from salon_backend.database.supabase_client import get_supabase
from supabase import Client
from typing import Dict, List, Tuple
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_permissions(supabase: Client, rows: Dict) -> Tuple[int, int]:
    """Seed permissions from config. Returns (processed, failed)."""
    logger.info("Seeding permissions...")

    created_count = 0
    updated_count = 0
    failed_count = 0

    for perm in rows["permissions"]:
        try:
            existing = supabase.table("permissions")\
                .select("id")\
                .eq("name", perm["name"])\
                .execute()

            if existing.data:
                supabase.table("permissions")\
                    .update({
                        "resource": perm["resource"],
                        "action": perm["action"],
                        "description": perm["description"]
                    })\
                    .eq("name", perm["name"])\
                    .execute()
                updated_count += 1
                logger.debug(f"Updated permission: {perm['name']}")
            else:
                supabase.table("permissions").insert(perm).execute()
                created_count += 1
                logger.debug(f"Created permission: {perm['name']}")
        except Exception as e:
            logger.error(f"Error processing permission {perm['name']}: {e}")
            failed_count += 1

    logger.info(f"Permissions seeded: {created_count} created, {updated_count} updated, {failed_count} failed")
    return created_count + updated_count, failed_count


def seed_roles(supabase: Client, rows: Dict) -> Tuple[int, int]:
    """Seed roles and their permission links from config. Returns (processed, failed)."""
    logger.info("Seeding roles...")

    created_count = 0
    updated_count = 0
    failed_count = 0

    for role in rows["roles"]:
        try:
            existing = supabase.table("roles")\
                .select("id")\
                .eq("name", role["name"])\
                .execute()

            if existing.data:
                supabase.table("roles")\
                    .update({"description": role["description"]})\
                    .eq("name", role["name"])\
                    .execute()
                role_id = existing.data[0]["id"]
                updated_count += 1
                logger.debug(f"Updated role: {role['name']}")
            else:
                result = supabase.table("roles").insert({
                    "name": role["name"],
                    "description": role["description"]
                }).execute()
                role_id = result.data[0]["id"]
                created_count += 1
                logger.debug(f"Created role: {role['name']}")

            sync_role_permissions(supabase, role_id, role["name"], role["permissions"])

        except Exception as e:
            logger.error(f"Error processing role {role['name']}: {e}")
            failed_count += 1

    logger.info(f"Roles seeded: {created_count} created, {updated_count} updated, {failed_count} failed")
    return created_count + updated_count, failed_count


def sync_role_permissions(supabase: Client, role_id: str, role_name: str, permission_names: List[str]):
    """Make role_permissions for a role match the matrix exactly"""
    if permission_names:
        permission_result = supabase.table("permissions")\
            .select("id")\
            .in_("name", permission_names)\
            .execute()
        permission_ids = {p["id"] for p in permission_result.data or []}
    else:
        permission_ids = set()

    existing_result = supabase.table("role_permissions")\
        .select("permission_id")\
        .eq("role_id", role_id)\
        .execute()
    existing_permission_ids = {p["permission_id"] for p in existing_result.data or []}

    new_assignments = [
        {"role_id": role_id, "permission_id": pid}
        for pid in sorted(permission_ids - existing_permission_ids)
    ]
    if new_assignments:
        supabase.table("role_permissions").insert(new_assignments).execute()
        logger.debug(f"Assigned {len(new_assignments)} permissions to role {role_name}")

    permissions_to_remove = existing_permission_ids - permission_ids
    if permissions_to_remove:
        supabase.table("role_permissions")\
            .delete()\
            .eq("role_id", role_id)\
            .in_("permission_id", sorted(permissions_to_remove))\
            .execute()
        logger.debug(f"Removed {len(permissions_to_remove)} permissions from role {role_name}")


def run_seed(supabase: Client) -> int:
    """Seed everything; returns the number of rows that failed."""
    rows = get_permission_rows()

    logger.info("Starting permissions and roles seeding...")

    # Roles reference permissions, so permissions go first
    perm_count, perm_failed = seed_permissions(supabase, rows)
    role_count, role_failed = seed_roles(supabase, rows)

    logger.info(f"Total: {perm_count} permissions, {role_count} roles processed")
    return perm_failed + role_failed


def main():
    """Main function to seed permissions and roles"""
    try:
        failed = run_seed(get_supabase())
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)

    if failed:
        logger.error(f"Seeding finished with {failed} failed rows")
        sys.exit(1)
    logger.info("Seeding completed successfully!")


if __name__ == "__main__":
    main()
