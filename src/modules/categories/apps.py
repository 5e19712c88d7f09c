from django.apps import AppConfig


class CategoriesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.categories"
    label = "categories"

    def ready(self) -> None:
        from modules.categories.repositories.django_repository import (
            CategoryDjangoRepository,
        )
        from modules.categories.services import CategoryService

        self.service = CategoryService(repository=CategoryDjangoRepository())
