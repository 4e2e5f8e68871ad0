from __future__ import annotations

import mimetypes
import random
from decimal import Decimal
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from modules.products import providers
from modules.products.dtos import CreateProductDTO, ImageUploadDTO
from modules.products.exceptions import ProductValidationError, StoreUnavailable
from shared.domain.media import MediaStoreError

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png"}


class Command(BaseCommand):
    help = "Seed the catalog with one product per image found in a directory."

    def add_arguments(self, parser):
        parser.add_argument("images_dir", type=Path)
        parser.add_argument(
            "--seed", type=int, default=42, help="Random seed for generated prices."
        )

    def handle(self, *args, **options):
        images_dir: Path = options["images_dir"]
        if not images_dir.is_dir():
            raise CommandError(f"{images_dir} is not a directory.")

        images = sorted(
            p for p in images_dir.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES
        )
        if not images:
            raise CommandError(f"No jpg/png images found in {images_dir}.")

        rng = random.Random(options["seed"])
        service = providers.build_product_service()
        created = 0

        self.stdout.write(f"Seeding {len(images)} products...")
        for path in images:
            name = path.stem.replace("-", " ").replace("_", " ").title()
            dto = CreateProductDTO(
                name=name,
                description=f"{name} from the seed catalog",
                price=Decimal(rng.randint(199, 9999)) / 100,
            )
            image = ImageUploadDTO(
                filename=path.name,
                content_type=mimetypes.guess_type(path.name)[0] or "image/jpeg",
                content=path.read_bytes(),
            )
            try:
                service.create_product(dto, image)
            except (ProductValidationError, MediaStoreError, StoreUnavailable) as exc:
                self.stderr.write(self.style.WARNING(f"Skipped {path.name}: {exc}"))
                continue
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Seed completed: products={created}"))
