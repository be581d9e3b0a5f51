from rest_framework_simplejwt.tokens import RefreshToken


class CustomRefreshToken(RefreshToken):
    """Refresh token carrying the user's role; access tokens derived from it inherit the claims"""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token["email"] = user.email
        token["role"] = user.role
        token["is_seller"] = user.is_seller()
        return token
