from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from authentication.api.serializers import AddressSerializer
from authentication.domain.services.address_service import AddressService
from infrastructure.container import container
from utils.api_responses import error_from_result, success_response, validation_error_response


class AddressBaseView(APIView):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> AddressService:
        return container.address_service()


class AddressListCreateAPIView(AddressBaseView):
    @extend_schema(
        operation_id="addresses_list",
        summary="List saved addresses",
        description="Default address first, then newest.",
        responses={200: AddressSerializer(many=True)},
        tags=["Addresses"],
    )
    def get(self, request):
        result = self.get_service().list_addresses(request.user)
        if not result.ok:
            return error_from_result(result)
        return success_response({"addresses": AddressSerializer(result.value, many=True).data})

    @extend_schema(
        operation_id="addresses_create",
        summary="Add an address",
        description="""
        The first address of a user, or any address sent with `is_default: true`,
        becomes the single default address.
        """,
        request=AddressSerializer,
        responses={201: AddressSerializer, 400: OpenApiResponse(description="Validation failed")},
        tags=["Addresses"],
    )
    def post(self, request):
        serializer = AddressSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().create_address(request.user, serializer.validated_data)
        if not result.ok:
            return error_from_result(result)
        return success_response(
            {"address": AddressSerializer(result.value).data},
            message="Address created successfully",
            status_code=status.HTTP_201_CREATED,
        )


class AddressDefaultAPIView(AddressBaseView):
    @extend_schema(
        operation_id="addresses_set_default",
        summary="Make an address the default",
        request=None,
        responses={200: AddressSerializer, 404: OpenApiResponse(description="Address not found")},
        tags=["Addresses"],
    )
    def put(self, request, pk):
        result = self.get_service().set_default(request.user, pk)
        if not result.ok:
            return error_from_result(result)
        return success_response({"address": AddressSerializer(result.value).data}, message="Default address updated")


class AddressDetailAPIView(AddressBaseView):
    @extend_schema(
        operation_id="addresses_delete",
        summary="Delete an address",
        responses={
            200: OpenApiResponse(description="Address deleted"),
            404: OpenApiResponse(description="Address not found"),
            409: OpenApiResponse(description="Address is used by existing orders"),
        },
        tags=["Addresses"],
    )
    def delete(self, request, pk):
        result = self.get_service().delete_address(request.user, pk)
        if not result.ok:
            return error_from_result(result)
        return success_response(message="Address deleted successfully")
