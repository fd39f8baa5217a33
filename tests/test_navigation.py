from __future__ import annotations

import dataclasses
import unittest

from lavon.navigation import Role, build_menu, can_create_sales


def _titles(menu, section_title: str) -> list[str]:
    for section in menu.sections:
        if section.title == section_title:
            return [item.title for item in section.items]
    raise AssertionError(f"Section {section_title} missing")


class BuildMenuTests(unittest.TestCase):
    def test_admin_sees_everything_plus_admin_section(self) -> None:
        menu = build_menu("admin")

        self.assertEqual([s.title for s in menu.sections], ["Customers", "Clusters", "Finance", "Admin"])
        self.assertIn("Create Cluster", _titles(menu, "Clusters"))
        self.assertIn("History Payment", _titles(menu, "Finance"))
        self.assertEqual(_titles(menu, "Admin"), ["All Users", "Marketing Rank", "Commissions"])

    def test_finance_cannot_create_but_sees_payment_history(self) -> None:
        menu = build_menu("finance")

        for section in menu.sections:
            self.assertFalse(any(item.title.startswith("Create") for item in section.items))
        self.assertIn("History Payment", _titles(menu, "Finance"))
        self.assertNotIn("/users", menu.urls())

    def test_sales_creates_customers_and_sales_only(self) -> None:
        menu = build_menu("sales")

        self.assertIn("Create Customers", _titles(menu, "Customers"))
        self.assertIn("Create New Sales", _titles(menu, "Finance"))
        self.assertNotIn("Create Cluster", _titles(menu, "Clusters"))
        self.assertNotIn("History Payment", _titles(menu, "Finance"))
        self.assertIn("Sales Data", _titles(menu, "Finance"))

    def test_unknown_role_browses_without_creating(self) -> None:
        for role in (None, "", "guest", "intern"):
            menu = build_menu(role)
            self.assertIs(menu.role, Role.GUEST)
            self.assertNotIn("/sales/create", menu.urls())
            self.assertIn("/sales/payments", menu.urls())
            self.assertEqual(menu.sections, build_menu("finance").sections)
            self.assertIn("/sales/data", menu.urls())

    def test_menus_do_not_share_state(self) -> None:
        admin = build_menu("admin")
        build_menu("sales")
        build_menu("finance")

        self.assertEqual(admin, build_menu("admin"))
        self.assertNotIn("Admin", [s.title for s in build_menu("finance").sections])
        with self.assertRaises(dataclasses.FrozenInstanceError):
            admin.sections[0].title = "Changed"  # type: ignore[misc]

    def test_role_matching_ignores_case(self) -> None:
        self.assertIs(build_menu(" Admin ").role, Role.ADMIN)


class CanCreateSalesTests(unittest.TestCase):
    def test_only_admin_and_sales(self) -> None:
        self.assertTrue(can_create_sales("admin"))
        self.assertTrue(can_create_sales("sales"))
        self.assertFalse(can_create_sales("finance"))
        self.assertFalse(can_create_sales(None))
        self.assertTrue(build_menu("sales").can_create_sales)
