from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny

# Registers the marketplace collectors with the default registry
from marketplace.infra.observability import metrics  # noqa: F401


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def prometheus_metrics(request):
    """
    Exposes order, cart and review metrics in the Prometheus text format.
    """
    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
