import logging

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify

from marketplace.models import Category


logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Fresh Pineapples", "Whole fruit straight from the farm"),
    ("Cut Fruit", "Peeled, cored and sliced pineapple"),
    ("Juices & Drinks", "Pressed juice, cordials and smoothies"),
    ("Preserves", "Jams, tarts and canned pineapple"),
    ("Dried Snacks", "Dehydrated chips and candied pieces"),
    ("Seedlings", "Crowns, suckers and young plants for growers"),
]


class Command(BaseCommand):
    help = "Seeds the default produce categories into the database."

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS("Seeding categories..."))

        created_count = 0
        with transaction.atomic():
            for name, description in DEFAULT_CATEGORIES:
                category, created = Category.objects.get_or_create(
                    slug=slugify(name),
                    defaults={"name": name, "description": description, "is_active": True},
                )
                if created:
                    self.stdout.write(self.style.SUCCESS(f"Created category: {category.name}"))
                    created_count += 1
                else:
                    self.stdout.write(self.style.WARNING(f"Category already exists: {category.name}"))

        logger.info(f"Seeded {created_count} categories")
        self.stdout.write(self.style.SUCCESS(f"Category seeding complete. Created {created_count} categories."))
