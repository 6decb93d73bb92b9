from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.core.management.color import no_style
from django.db import transaction, connection
from django.utils import timezone

from apps.catalog.models import Category, Product, ProductImage, Review
from apps.users.models import User

CATEGORIES = [
    ("Grains & Cereals", "Maize, rice, millet, sorghum and other staple grains."),
    ("Tubers", "Cassava, yam, cocoyam and sweet potato."),
    ("Vegetables", "Fresh vegetables from smallholder farms."),
    ("Fruits", "Seasonal and tropical fruit."),
    ("Spices", "Dried peppers, ginger, and local spice blends."),
    ("Processed Foods", "Gari, palm oil, shea butter and other processed goods."),
]

USERS = [
    {
        "id": 1,
        "username": "ama_farms",
        "email": "ama@agrimarket.test",
        "first_name": "Ama",
        "last_name": "Owusu",
        "user_type": User.UserType.SELLER,
        "country": "Ghana",
        "password": "SellerPass123!",
    },
    {
        "id": 2,
        "username": "kano_harvest",
        "email": "kano@agrimarket.test",
        "first_name": "Musa",
        "last_name": "Bello",
        "user_type": User.UserType.SELLER,
        "country": "Nigeria",
        "password": "SellerPass123!",
    },
    {
        "id": 3,
        "username": "thies_growers",
        "email": "thies@agrimarket.test",
        "first_name": "Awa",
        "last_name": "Diop",
        "user_type": User.UserType.SELLER,
        "country": "Senegal",
        "password": "SellerPass123!",
    },
    {
        "id": 4,
        "username": "kofi_m",
        "email": "kofi@agrimarket.test",
        "first_name": "Kofi",
        "last_name": "Mensah",
        "user_type": User.UserType.CUSTOMER,
        "country": "Ghana",
        "password": "CustomerPass123!",
    },
    {
        "id": 5,
        "username": "chioma_e",
        "email": "chioma@agrimarket.test",
        "first_name": "Chioma",
        "last_name": "Eze",
        "user_type": User.UserType.CUSTOMER,
        "country": "Nigeria",
        "password": "CustomerPass123!",
    },
    {
        "id": 6,
        "username": "admin",
        "email": "admin@agrimarket.test",
        "first_name": "admin",
        "last_name": "user",
        "user_type": User.UserType.ADMIN,
        "country": "",
        "password": "AdminPass123!",
        "is_superuser": True,
    },
]

# (id, seller id, category, name, price, country, stock, featured, description)
PRODUCTS = [
    (1, 1, "Grains & Cereals", "White Maize (50kg)", "42.00", "Ghana", 120, True,
     "Sun-dried white maize from the Brong-Ahafo region."),
    (2, 2, "Grains & Cereals", "Local Parboiled Rice (25kg)", "35.50", "Nigeria", 80, False,
     "Stone-free parboiled rice milled in Kano."),
    (3, 3, "Grains & Cereals", "Pearl Millet (10kg)", "14.75", "Senegal", 60, False,
     "Millet for thiakry and porridge."),
    (4, 1, "Tubers", "Puna Yam (per tuber)", "4.20", "Ghana", 300, True,
     "Large puna yams, ideal for fufu and ampesi."),
    (5, 2, "Tubers", "Fresh Cassava (20kg)", "9.90", "Nigeria", 150, False,
     "Freshly harvested sweet cassava roots."),
    (6, 1, "Vegetables", "Roma Tomatoes (crate)", "18.00", "Ghana", 45, True,
     "Firm Roma tomatoes picked at first blush."),
    (7, 3, "Vegetables", "Okra (5kg)", "7.80", "Senegal", 70, False,
     "Tender okra pods for soups and stews."),
    (8, 2, "Vegetables", "Garden Eggs (basket)", "6.40", "Nigeria", 90, False,
     "White garden eggs, great with tomato stew."),
    (9, 3, "Fruits", "Kent Mangoes (box)", "12.30", "Senegal", 55, True,
     "Sweet Kent mangoes from the Casamance."),
    (10, 1, "Fruits", "Sugarloaf Pineapple (6 pack)", "10.00", "Ghana", 40, False,
     "Low-acid sugarloaf pineapples."),
    (11, 2, "Spices", "Dried Scotch Bonnet (1kg)", "8.60", "Nigeria", 100, False,
     "Sun-dried scotch bonnet peppers, ground on request."),
    (12, 1, "Spices", "Ginger Root (5kg)", "11.25", "Ghana", 65, False,
     "Fresh ginger root with a strong aroma."),
    (13, 1, "Processed Foods", "Gari (10kg)", "13.40", "Ghana", 110, True,
     "Yellow gari roasted with red palm oil."),
    (14, 2, "Processed Foods", "Red Palm Oil (5L)", "16.90", "Nigeria", 75, False,
     "Unrefined red palm oil for tomato stew and jollof."),
    (15, 3, "Processed Foods", "Unrefined Shea Butter (1kg)", "9.50", "Senegal", 85, False,
     "Hand-processed grade A shea butter."),
]

# (product id, reviewer id, rating, title, content)
REVIEWS = [
    (1, 4, 5, "Clean grain", "No stones and very dry."),
    (1, 5, 4, "Good value", "Arrived on time."),
    (4, 5, 5, "Great yams", "Pounded beautifully."),
    (6, 4, 4, "Fresh", "A few soft ones but mostly firm."),
    (6, 5, 3, "Okay", "Smaller than expected."),
    (9, 4, 5, "Sweet", "Best mangoes this season."),
    (13, 5, 4, "Tasty gari", "Nice and crunchy."),
    (14, 4, 5, "Authentic", "Proper red oil."),
]


class Command(BaseCommand):
    help = "Seed the AgriMarket catalog with sellers, products, images and reviews."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        def reset_sequences(models):
            sql_list = connection.ops.sequence_reset_sql(no_style(), models)
            if not sql_list:
                return
            with connection.cursor() as cursor:
                for sql in sql_list:
                    cursor.execute(sql)

        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            Review.objects.all().delete()
            ProductImage.objects.all().delete()
            Product.objects.all().delete()
            Category.objects.all().delete()
            User.objects.all().delete()

        self.stdout.write("Seeding categories...")
        name_to_cat = {}
        for name, description in CATEGORIES:
            cat, _ = Category.objects.get_or_create(
                name=name, defaults={"description": description}
            )
            name_to_cat[name] = cat

        self.stdout.write("Seeding users...")
        for payload in USERS:
            attrs = dict(payload)
            user_id = attrs.pop("id")
            raw_password = attrs.pop("password")
            is_superuser = attrs.pop("is_superuser", False)
            defaults = {**attrs, "is_staff": is_superuser, "is_superuser": is_superuser}
            user, created = User.objects.get_or_create(id=user_id, defaults=defaults)
            if not created:
                for field, value in defaults.items():
                    setattr(user, field, value)
            user.set_password(raw_password)
            user.save()

        self.stdout.write("Seeding products...")
        now = timezone.now()
        for pid, seller_id, cat_name, name, price, country, stock, featured, desc in PRODUCTS:
            product, _ = Product.objects.get_or_create(
                id=pid,
                defaults=dict(
                    seller_id=seller_id,
                    category=name_to_cat[cat_name],
                    name=name,
                    description=desc,
                    price=Decimal(price),
                    country_of_origin=country,
                    stock_quantity=stock,
                    featured=featured,
                    # Spread creation times so the default newest-first order is meaningful.
                    created_at=now - timedelta(days=len(PRODUCTS) - pid),
                ),
            )
            ProductImage.objects.get_or_create(
                product=product,
                is_primary=True,
                defaults={"image_path": f"/images/products/{pid}.jpg"},
            )

        self.stdout.write("Seeding reviews...")
        for product_id, user_id, rating, title, content in REVIEWS:
            Review.objects.get_or_create(
                product_id=product_id,
                user_id=user_id,
                defaults={"rating": rating, "title": title, "content": content},
            )

        # Explicit ids were inserted; move sequences past them.
        reset_sequences([User, Product])

        self.stdout.write(self.style.SUCCESS("AgriMarket seed completed."))
