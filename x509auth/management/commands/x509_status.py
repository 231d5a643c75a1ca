from django.core.management.base import BaseCommand, CommandError

from x509auth.conf import build_gate, get_x509_conf
from x509auth.gate import FatalInitError


class Command(BaseCommand):
    help = "Resolve the X509 gate configuration the way the middleware does and print it"

    def handle(self, *args, **options):
        try:
            conf = get_x509_conf()
            gate = build_gate(conf)
        except FatalInitError as exc:
            raise CommandError(str(exc)) from exc

        config = gate.config
        self.stdout.write(f"Enforce: {config.enforce}")
        if not config.enforce:
            return

        self.stdout.write(f"Cert must contain: {config.cert_contains or '(any subject)'}")
        if config.enforced_paths is None:
            self.stdout.write("Enforced paths: (all)")
        else:
            self.stdout.write("Enforced paths:")
            for path in config.enforced_paths:
                self.stdout.write(f"  {path}")
        if conf["CERT_HEADER"]:
            self.stdout.write(f"Forwarded certificate header: {conf['CERT_HEADER']}")
