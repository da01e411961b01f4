from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.utils import timezone


def index(request):
    return JsonResponse({'message': 'StayInn Hostels API Server', 'status': 'running', 'version': '1.0.0'})


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        return JsonResponse({
            'status': 'OK',
            'db': bool(row and row[0] == 1),
            'timestamp': timezone.now().isoformat(),
        })
    except DatabaseError as e:
        return JsonResponse({'status': 'ERROR', 'error': str(e)}, status=500)
