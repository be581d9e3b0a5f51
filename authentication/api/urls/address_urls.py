from django.urls import path

from authentication.api.views import AddressDefaultAPIView, AddressDetailAPIView, AddressListCreateAPIView


urlpatterns = [
    path("", AddressListCreateAPIView.as_view(), name="address_list"),
    path("<int:pk>/", AddressDetailAPIView.as_view(), name="address_detail"),
    path("<int:pk>/default/", AddressDefaultAPIView.as_view(), name="address_set_default"),
]
