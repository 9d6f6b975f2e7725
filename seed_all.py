"""
Master Database Seeding Script
Creates database tables and populates them with demo accounts
"""

import sys
from datetime import datetime

from create_tables import create_tables
from demo_users import DEMO_ADMINS, DEMO_USERS
from tracker.database import SessionLocal, commit
from tracker.models.admin import Admin
from tracker.services.user_manager import UserManager, normalize_email
from tracker.utils.policy import AdminRole
from tracker.utils.security import hash_password


def seed_portal_admins():
    """Create the admin-portal accounts, attaching sub-admins to the main admin"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Admin Portal Accounts")
    print(f"{'='*60}")

    session = SessionLocal()
    try:
        created = 0
        main_admin_id = None

        for admin_data in DEMO_ADMINS:
            email = normalize_email(admin_data["email"])
            role = AdminRole(admin_data["role"])
            existing = session.query(Admin).filter(Admin.email == email).first()

            if existing:
                print(f"[SKIP] Admin {email} already exists, skipping...")
                if role == AdminRole.MAIN_ADMIN:
                    main_admin_id = existing.id
                continue

            admin = Admin(
                name=admin_data["name"],
                email=email,
                password_hash=hash_password(admin_data["password"]),
                role=role.value,
                parent_admin_id=main_admin_id if role == AdminRole.SUB_ADMIN else None,
            )
            session.add(admin)
            commit(session)

            if role == AdminRole.MAIN_ADMIN:
                main_admin_id = admin.id

            created += 1
            print(f"[SUCCESS] Created {role.value}: {admin_data['name']} ({email})")

        print(f"\n[SUCCESS] Successfully created {created} admin portal accounts!")
        return True

    except Exception as e:
        print(f"[ERROR] Error creating admin portal accounts: {e}")
        session.rollback()
        return False
    finally:
        session.close()


def seed_demo_users():
    """Create demo employee-side users"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Demo Users")
    print(f"{'='*60}")

    session = SessionLocal()
    try:
        manager = UserManager(session)
        created = 0

        for user_data in DEMO_USERS:
            if manager.get_by_email(user_data["email"]):
                print(f"[SKIP] User {user_data['email']} already exists, skipping...")
                continue

            user, _ = manager.register(
                email=user_data["email"],
                password=user_data["password"],
                name=user_data["name"],
                user_type=user_data["user_type"],
                department=user_data["department"],
            )
            created += 1
            print(f"[SUCCESS] Created user: {user.name} ({user.user_type} - {user.department})")

        print(f"\n[SUCCESS] Successfully created {created} demo users!")
        return True

    except Exception as e:
        print(f"[ERROR] Error creating demo users: {e}")
        session.rollback()
        return False
    finally:
        session.close()


def main():
    """Main function to run all seeding operations"""
    print("🌱 MASTER DATABASE SEEDING SCRIPT")
    print("=" * 60)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    seeding_operations = [
        ("create_tables", create_tables),
        ("seed_portal_admins", seed_portal_admins),
        ("seed_demo_users", seed_demo_users),
    ]

    failed_operations = [name for name, operation in seeding_operations if not operation()]
    success_count = len(seeding_operations) - len(failed_operations)

    print(f"\n{'='*60}")
    print("📊 SEEDING SUMMARY")
    print(f"{'='*60}")
    print(f"Total Operations: {len(seeding_operations)}")
    print(f"Successful: {success_count}")
    print(f"Failed: {len(failed_operations)}")

    if failed_operations:
        print(f"Failed Operations: {', '.join(failed_operations)}")
        print(f"\n[WARNING] Some seeding operations failed. Please check the errors above.")
        sys.exit(1)

    print(f"\n[SUCCESS] ALL SEEDING OPERATIONS COMPLETED SUCCESSFULLY!")
    print(f"\n[INFO] Login Credentials:")
    for admin_data in DEMO_ADMINS:
        print(f"   - {admin_data['role']}: {admin_data['email']} / {admin_data['password']}")
    print(f"   - Employee-side users: password123")
    print(f"\nCompleted at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


if __name__ == "__main__":
    main()
