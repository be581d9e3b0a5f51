from django.urls import path

from authentication.api.views import EnvelopeTokenRefreshView, LoginAPIView, ProfileAPIView, RegisterAPIView


urlpatterns = [
    # Auth
    path("register/", RegisterAPIView.as_view(), name="register"),
    path("login/", LoginAPIView.as_view(), name="login"),
    path("token/refresh/", EnvelopeTokenRefreshView.as_view(), name="token_refresh"),
    # Profile
    path("profile/", ProfileAPIView.as_view(), name="profile"),
]
