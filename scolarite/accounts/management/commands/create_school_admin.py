from django.core.management.base import BaseCommand, CommandError

from accounts.models import User


class Command(BaseCommand):
    help = "Create (or promote) a school administrator account."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("password")
        parser.add_argument("--email", default="")

    def handle(self, *args, **options):
        username = options["username"].strip()
        if not username:
            raise CommandError("Username is required.")

        user, created = User.objects.get_or_create(username=username, defaults={"email": options["email"]})
        user.is_school_admin = True
        user.is_staff = True
        user.set_password(options["password"])
        user.save()

        verb = "Created" if created else "Updated"
        self.stdout.write(self.style.SUCCESS(f"{verb} school admin {user.username}."))
