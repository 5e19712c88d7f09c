from __future__ import annotations

import random
from decimal import Decimal

from django.apps import apps
from django.core.management.base import BaseCommand

from modules.categories.dtos import CreateCategoryDTO
from modules.categories.models import Category
from modules.products.dtos import CreateProductDTO


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        categories = self._seed_categories()
        products_created = self._seed_products(categories)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"categories={len(categories)}, "
                f"products={products_created}"
            )
        )

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        service = apps.get_app_config("categories").service
        seed_categories = [
            ("Electrónica", "Monitores, periféricos y accesorios"),
            ("Muebles", "Mobiliario de oficina"),
            ("Papelería", "Material de escritorio"),
        ]
        categories: dict[str, Category] = {
            category.name: category for category in service.list_categories()
        }
        for name, description in seed_categories:
            if service.exists_by_name(name):
                continue
            categories[name] = service.create_category(
                CreateCategoryDTO(name=name, description=description)
            )
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_products(self, categories: dict[str, Category]) -> int:
        self.stdout.write("Creating products...")
        service = apps.get_app_config("products").service
        catalog = [
            ("ELE-001", 'Monitor 27"', "Electrónica", Decimal("1299.90")),
            ("ELE-002", "Teclado mecánico", "Electrónica", Decimal("399.90")),
            ("ELE-003", "Ratón inalámbrico", "Electrónica", Decimal("249.90")),
            ("ELE-004", "Cable HDMI 2m", "Electrónica", Decimal("19.90")),
            ("MUE-001", "Mesa de escritorio", "Muebles", Decimal("899.00")),
            ("MUE-002", "Silla ergonómica", "Muebles", Decimal("1499.00")),
            ("MUE-003", "Estantería", "Muebles", Decimal("699.00")),
            ("PAP-001", "Papel A4", "Papelería", Decimal("29.90")),
            ("PAP-002", "Bolígrafo azul", "Papelería", Decimal("4.90")),
            ("PAP-003", "Cuaderno", "Papelería", Decimal("19.90")),
            ("PAP-004", "Grapadora", "Papelería", Decimal("39.90")),
        ]
        created = 0
        for code, name, category_name, price in catalog:
            category = categories.get(category_name)
            if category is None:
                self.stdout.write(
                    self.style.WARNING(f"Skipping {code} (no category {category_name}).")
                )
                continue
            if service.exists_by_code(code):
                continue
            service.create_product(
                CreateProductDTO(
                    name=name,
                    code=code,
                    price=price,
                    stock=random.randint(10, 200),
                    category_id=category.id,
                )
            )
            created += 1
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created
