from rest_framework.permissions import BasePermission


def current_role(user):
    """Role as stored right now; a token minted before a role change must not grant seller access."""
    return user.__class__.objects.filter(pk=user.pk).values_list("role", flat=True).first()


def can_sell(user) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False

    cached = getattr(user, "_can_sell", None)
    if cached is None:
        role = current_role(user)
        cached = role in user.SELLER_ROLES or role == user.ROLE_ADMIN or bool(getattr(user, "is_superuser", False))
        user._can_sell = cached
    return cached


class SellerRequired(BasePermission):
    """Seller, buyer-and-seller or admin accounts."""

    message = "Seller account required"

    def has_permission(self, request, view) -> bool:
        return can_sell(getattr(request, "user", None))

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)
