import unittest
from types import SimpleNamespace

from apps.users.models import User, UserRole
from apps.users.permissions import IsCourierOrAdmin, IsMarketplaceAdmin, IsSellerOrAdmin


def _request(user):
    return SimpleNamespace(user=user)


class RolePropertyTests(unittest.TestCase):
    def test_admin_roles_are_privileged(self):
        for role in (UserRole.ADMIN, UserRole.SUPER_ADMIN):
            self.assertTrue(User(username="a", role=role).is_privileged)

    def test_superuser_flag_is_privileged_regardless_of_role(self):
        self.assertTrue(User(username="root", is_superuser=True).is_privileged)

    def test_seller_can_sell_but_is_not_privileged(self):
        seller = User(username="s", role=UserRole.SELLER)
        self.assertTrue(seller.can_sell)
        self.assertFalse(seller.is_privileged)

    def test_display_name_falls_back_to_username(self):
        self.assertEqual(User(username="kiala").display_name, "kiala")
        self.assertEqual(
            User(username="k", first_name="Kiala", last_name="Manuel").display_name,
            "Kiala Manuel",
        )


class PermissionClassTests(unittest.TestCase):
    def test_admin_permission(self):
        perm = IsMarketplaceAdmin()
        self.assertTrue(perm.has_permission(_request(User(username="a", role=UserRole.ADMIN)), None))
        self.assertFalse(perm.has_permission(_request(User(username="u")), None))

    def test_seller_permission(self):
        perm = IsSellerOrAdmin()
        self.assertTrue(perm.has_permission(_request(User(username="s", role=UserRole.SELLER)), None))
        self.assertTrue(perm.has_permission(_request(User(username="a", role=UserRole.ADMIN)), None))
        self.assertFalse(perm.has_permission(_request(User(username="u")), None))

    def test_courier_permission(self):
        perm = IsCourierOrAdmin()
        courier = User(username="c", role=UserRole.COURIER)
        self.assertTrue(courier.is_courier)
        self.assertFalse(courier.can_sell)
        self.assertTrue(perm.has_permission(_request(courier), None))
        self.assertTrue(perm.has_permission(_request(User(username="a", role=UserRole.ADMIN)), None))
        self.assertFalse(perm.has_permission(_request(User(username="s", role=UserRole.SELLER)), None))

    def test_anonymous_is_denied(self):
        anon = SimpleNamespace(is_authenticated=False)
        self.assertFalse(IsMarketplaceAdmin().has_permission(_request(anon), None))
        self.assertFalse(IsSellerOrAdmin().has_permission(_request(anon), None))
        self.assertFalse(IsCourierOrAdmin().has_permission(_request(anon), None))
