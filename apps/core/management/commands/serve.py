import uvicorn
from django.conf import settings
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = 'Runs the ASGI application under uvicorn on settings.PORT.'

    def add_arguments(self, parser):
        parser.add_argument('--host', default='0.0.0.0')
        parser.add_argument('--port', type=int, default=None, help='Defaults to the PORT setting')
        parser.add_argument('--workers', type=int, default=1)

    def handle(self, *args, **options):
        port = options['port'] or settings.PORT
        self.stdout.write(
            f"Serving on http://{options['host']}:{port}/api/ "
            f"(mode={settings.DEPLOYMENT_MODE}, auth_bypass={settings.AUTH_BYPASS})"
        )
        uvicorn.run(
            'config.asgi:application',
            host=options['host'],
            port=port,
            workers=options['workers'],
            log_config=None,
        )
