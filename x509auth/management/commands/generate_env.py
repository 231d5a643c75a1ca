from django.core.management.base import BaseCommand
import os
import secrets

ENV_TEMPLATE = """
DJANGO_SECRET_KEY={secret}
DEBUG=1
ALLOWED_HOSTS=*

# Mount path of the application, prepended to every X509_PATHS entry
FORCE_SCRIPT_NAME=

X509_ENFORCE_POLICY=x509auth.policy.SettingsEnforcementPolicy
X509_ENFORCE={enforce}
X509_CERT_CONTAINS=
X509_PATHS=
X509_CONTEXT_PATH=
X509_CERT_HEADER=

LOG_LEVEL=INFO
"""


class Command(BaseCommand):
    help = "Generate .env file for the X509 authentication gate"

    def add_arguments(self, parser):
        parser.add_argument("--path", default=".env", help="Where to write the file")
        parser.add_argument("--enforce", action="store_true", help="Turn X509 enforcement on")

    def handle(self, *args, **options):
        path = options["path"]
        secret_key = secrets.token_hex(32)

        env_contents = ENV_TEMPLATE.format(
            secret=secret_key,
            enforce="1" if options["enforce"] else "0",
        )

        if os.path.exists(path):
            self.stdout.write(self.style.WARNING(f"{path} already exists! Not overwriting."))
            return

        with open(path, "w") as f:
            f.write(env_contents)

        self.stdout.write(self.style.SUCCESS(f"✔ {path} file created successfully!"))
