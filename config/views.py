from django.http import JsonResponse


def health_check(request):
    """Liveness probe for the hosting platform."""
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'code': 'NOT_FOUND',
        'message': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'code': 'INTERNAL_SERVER_ERROR',
        'message': 'Internal server error',
        'status': 500
    }, status=500)
