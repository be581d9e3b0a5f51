"""
AddressService - Shipping Addresses

Each user owns any number of addresses, at most one of which is the default.
Default changes lock the user's address rows so that concurrent requests cannot
leave two defaults behind.
"""

from typing import Dict, List

from django.db import transaction
from django.db.models import ProtectedError

from authentication.domain.models.address import Address
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class AddressService(BaseService):
    @BaseService.log_performance
    def list_addresses(self, user) -> ServiceResult[List[Address]]:
        return service_ok(list(Address.objects.filter(user=user).order_by("-is_default", "-created_at")))

    def _unset_defaults(self, user, exclude_id=None):
        # Lock every address row of the user before touching the default flag
        list(Address.objects.select_for_update().filter(user=user).values_list("id", flat=True))
        defaults = Address.objects.filter(user=user, is_default=True)
        if exclude_id is not None:
            defaults = defaults.exclude(id=exclude_id)
        return defaults.update(is_default=False)

    @BaseService.log_performance
    @transaction.atomic
    def create_address(self, user, data: Dict) -> ServiceResult[Address]:
        """
        Create an address. It becomes the default when requested, or when it is
        the user's first address.
        """
        make_default = bool(data.get("is_default")) or not Address.objects.filter(user=user).exists()
        if make_default:
            self._unset_defaults(user)

        address = Address.objects.create(
            user=user,
            street_address=data["street_address"],
            city=data["city"],
            state=data["state"],
            postal_code=data["postal_code"],
            country=data.get("country") or Address.DEFAULT_COUNTRY,
            is_default=make_default,
        )
        self.logger.info(f"Address {address.id} created for user {user.id} (default={make_default})")
        return service_ok(address)

    @BaseService.log_performance
    @transaction.atomic
    def set_default(self, user, address_id) -> ServiceResult[Address]:
        try:
            address = Address.objects.select_for_update().get(id=address_id, user=user)
        except Address.DoesNotExist:
            return service_err(ErrorCodes.ADDRESS_NOT_FOUND, "Address not found")

        unset = self._unset_defaults(user, exclude_id=address.id)
        if not address.is_default:
            address.is_default = True
            address.save(update_fields=["is_default", "updated_at"])

        self.logger.info(f"Address {address.id} set as default for user {user.id} ({unset} previous default unset)")
        return service_ok(address)

    @BaseService.log_performance
    @transaction.atomic
    def get_or_create_default(self, user) -> Address:
        """Default address of the user, creating the placeholder when there is none."""
        address = Address.objects.filter(user=user, is_default=True).first()
        if address is None:
            address = Address.placeholder_for(user)
            address.save()
            self.logger.info(f"Placeholder default address {address.id} created for user {user.id}")
        return address

    @BaseService.log_performance
    def delete_address(self, user, address_id) -> ServiceResult[None]:
        try:
            address = Address.objects.get(id=address_id, user=user)
        except Address.DoesNotExist:
            return service_err(ErrorCodes.ADDRESS_NOT_FOUND, "Address not found")

        try:
            address.delete()
        except ProtectedError:
            return service_err(ErrorCodes.ADDRESS_IN_USE, "Address is used by existing orders")

        self.logger.info(f"Address {address_id} deleted for user {user.id}")
        return service_ok(None)
