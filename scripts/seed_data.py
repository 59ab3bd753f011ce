#!/usr/bin/env python3
"""
Database seed data script for the group read service.

This script populates the database with an office tree, staff, clients,
centers, groups and group role codes using Faker, so every read path has
realistic data to work against.
"""

import sys
import random
from pathlib import Path
from datetime import date
from typing import List, Optional

# Add the project root to the Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from faker import Faker
from sqlalchemy.orm import Session

from groupread.core.database import SessionLocal, create_tables
from groupread.core.logging_config import configure_logging
from groupread.models import (
    Office, Staff, Client, Group, Code, CodeValue,
    GroupLevel, GroupStatus, ClientStatus
)

# Initialize Faker
fake = Faker()
Faker.seed(42)  # For reproducible data
random.seed(42)

GROUP_ROLES = ["Leader", "Secretary", "Treasurer", "Member"]


class DataSeeder:
    """Class to handle database seeding operations."""

    def __init__(self, db: Optional[Session] = None):
        self.db: Session = db or SessionLocal()
        self.offices: List[Office] = []
        self.staff: List[Staff] = []
        self.clients: List[Client] = []
        self.centers: List[Group] = []
        self.groups: List[Group] = []

    def close(self):
        """Close database session."""
        self.db.close()

    def clear_existing_data(self):
        """Clear all existing data from tables."""
        print("🧹 Clearing existing data...")

        # Delete in reverse order of dependencies; self references are detached first
        self.db.query(CodeValue).delete()
        self.db.query(Code).delete()
        self.db.query(Group).update({Group.parent_id: None})
        self.db.query(Group).delete()
        self.db.query(Client).delete()
        self.db.query(Staff).delete()
        self.db.query(Office).update({Office.parent_id: None})
        self.db.query(Office).delete()

        self.db.commit()
        print("✅ Existing data cleared")

    def _add_office(self, name: str, parent: Optional[Office]) -> Office:
        office = Office(
            name=name,
            parent=parent,
            external_id=f"OFF-{len(self.offices) + 1:04d}",
            opening_date=fake.date_between(start_date="-10y", end_date="-1y"),
        )
        self.db.add(office)
        self.db.flush()

        # The path needs the generated id, so it is set after the flush
        office.hierarchy = f"{parent.hierarchy}{office.id}." if parent else "."
        self.offices.append(office)
        return office

    def create_offices(self, regions: int = 3, branches_per_region: int = 2):
        """Create a head office, regional offices and their branches."""
        print(f"🏢 Creating office tree ({regions} regions, {branches_per_region} branches each)...")

        head_office = self._add_office("Head Office", None)
        for region_number in range(1, regions + 1):
            region = self._add_office(f"{fake.city()} Region {region_number}", head_office)
            for branch_number in range(1, branches_per_region + 1):
                self._add_office(f"{fake.city()} Branch {region_number}.{branch_number}", region)

        self.db.commit()
        print(f"✅ Created {len(self.offices)} offices")

    def create_staff(self, per_office: int = 2):
        """Create staff in every office; the first of each office is a loan officer."""
        print(f"👤 Creating {per_office} staff per office...")

        for office in self.offices:
            for index in range(per_office):
                firstname, lastname = fake.first_name(), fake.last_name()
                member = Staff(
                    office=office,
                    firstname=firstname,
                    lastname=lastname,
                    display_name=f"{lastname}, {firstname}",
                    is_loan_officer=index == 0,
                    is_active=random.random() > 0.1,
                )
                self.db.add(member)
                self.staff.append(member)

        self.db.commit()
        print(f"✅ Created {len(self.staff)} staff")

    def create_clients(self, per_office: int = 5):
        """Create clients in every office, a few of them closed."""
        print(f"🧑 Creating {per_office} clients per office...")

        for office in self.offices:
            for _ in range(per_office):
                client = Client(
                    office=office,
                    display_name=fake.name(),
                    external_id=fake.unique.bothify(text="CL-#####"),
                    status_enum=random.choice(
                        [ClientStatus.ACTIVE, ClientStatus.ACTIVE, ClientStatus.PENDING, ClientStatus.CLOSED]
                    ).value,
                )
                self.db.add(client)
                self.clients.append(client)

        self.db.commit()
        print(f"✅ Created {len(self.clients)} clients")

    def _add_grouping(self, name: str, office: Office, level: GroupLevel, center: Optional[Group] = None) -> Group:
        office_staff = [member for member in self.staff if member.office_id == office.id]
        grouping = Group(
            display_name=name,
            office=office,
            staff=random.choice(office_staff) if office_staff and random.random() > 0.3 else None,
            center=center,
            level_id=level.value,
            status_enum=random.choice([GroupStatus.ACTIVE, GroupStatus.ACTIVE, GroupStatus.PENDING]).value,
            activation_date=fake.date_between(start_date="-3y", end_date=date.today()),
            external_id=fake.unique.bothify(text="GRP-#####"),
        )
        self.db.add(grouping)
        self.db.flush()

        grouping.hierarchy = f"{center.hierarchy}{grouping.id}." if center else f".{grouping.id}."
        return grouping

    def create_centers_and_groups(self, centers_per_office: int = 1, groups_per_office: int = 3):
        """Create centers and groups in every office; some groups sit under a center."""
        print(f"👥 Creating {centers_per_office} centers and {groups_per_office} groups per office...")

        for office in self.offices:
            office_centers = []
            for _ in range(centers_per_office):
                center = self._add_grouping(f"{fake.street_name()} Center", office, GroupLevel.CENTER)
                office_centers.append(center)
                self.centers.append(center)

            for _ in range(groups_per_office):
                center = random.choice(office_centers) if office_centers and random.random() > 0.5 else None
                group = self._add_grouping(f"{fake.last_name()} Group", office, GroupLevel.GROUP, center)
                self.groups.append(group)

        self.db.commit()
        print(f"✅ Created {len(self.centers)} centers and {len(self.groups)} groups")

    def create_group_roles(self, code_name: str = "GROUPROLE"):
        """Create the code holding the roles a client can have in a group."""
        print(f"🏷️  Creating {code_name} code values...")

        code = Code(code_name=code_name, is_system_defined=True)
        self.db.add(code)
        for position, role in enumerate(GROUP_ROLES):
            self.db.add(CodeValue(code=code, code_value=role, order_position=position))

        self.db.commit()
        print(f"✅ Created {len(GROUP_ROLES)} group roles")

    def run_full_seed(self,
                      regions: int = 3,
                      branches_per_region: int = 2,
                      staff_per_office: int = 2,
                      clients_per_office: int = 5,
                      centers_per_office: int = 1,
                      groups_per_office: int = 3):
        """Run complete database seeding process."""
        print("🌱 Starting database seeding process...")
        print("=" * 50)

        try:
            # Clear existing data
            self.clear_existing_data()

            # Create data in dependency order
            self.create_offices(regions, branches_per_region)
            self.create_staff(staff_per_office)
            self.create_clients(clients_per_office)
            self.create_centers_and_groups(centers_per_office, groups_per_office)
            self.create_group_roles()

            print()
            print("✅ Database seeding completed successfully!")
            print("=" * 50)
            print(f"📊 Summary:")
            print(f"   Offices: {len(self.offices)}")
            print(f"   Staff: {len(self.staff)}")
            print(f"   Clients: {len(self.clients)}")
            print(f"   Centers: {len(self.centers)}")
            print(f"   Groups: {len(self.groups)}")

        except Exception as e:
            print(f"❌ Seeding failed: {e}")
            self.db.rollback()
            raise


def main():
    """Main seeding function."""
    configure_logging()
    create_tables()
    seeder = DataSeeder()

    try:
        if len(sys.argv) > 1 and sys.argv[1] == "small":
            # Smaller dataset for quick testing
            seeder.run_full_seed(
                regions=2,
                branches_per_region=1,
                clients_per_office=3,
                groups_per_office=2
            )
        else:
            # Full dataset
            seeder.run_full_seed()

    finally:
        seeder.close()


if __name__ == "__main__":
    main()
