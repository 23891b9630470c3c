"""
Django management command to load demo data for the storefront.
Creates a shop, its catalog, an automatic discount, an offer and a shopper account.
"""

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone


DEMO_PRODUCTS = [
    # (title, category, price, mrp, quantity)
    ('Cotton Kurta', 'Apparel', '799.00', '1199.00', 40),
    ('Linen Shirt', 'Apparel', '1299.00', '1599.00', 25),
    ('Brass Diya Set', 'Home', '449.00', '599.00', 60),
    ('Ceramic Mug', 'Kitchen', '249.00', None, 100),
    ('Masala Chai Tin', 'Kitchen', '349.00', '399.00', 0),
]


class Command(BaseCommand):
    help = 'Load demo data for the storefront (shop, products, discount, offer, shopper)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--seller',
            type=str,
            default='demo-seller',
            help='Seller id that owns the demo shop (default: demo-seller)',
        )
        parser.add_argument(
            '--slug',
            type=str,
            default='demo',
            help='Demo shop slug (default: demo)',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help="Delete the seller's existing catalog and accounts before loading",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        from shops.models import Shop
        from catalog.models import Discount, Offer, Product
        from accounts.models import StorefrontUser

        seller_id = options['seller']
        slug = options['slug'].strip().lower()
        now = timezone.now()

        if options['clear']:
            for model in (Product, Discount, Offer, StorefrontUser):
                deleted, _ = model.objects.filter(seller_id=seller_id).delete()
                self.stdout.write(f'Deleted {deleted} {model._meta.verbose_name_plural}')

        self.stdout.write(self.style.NOTICE('Loading demo data...'))

        # Shop
        shop, created = Shop.objects.get_or_create(
            seller_id=seller_id,
            slug=slug,
            defaults={
                'name': 'Demo Bazaar',
                'description': 'Handpicked goods for every home',
            }
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created shop: {shop.slug}'))
        else:
            self.stdout.write(f'Shop already exists: {shop.slug}')

        # Products
        for title, category, price, mrp, quantity in DEMO_PRODUCTS:
            product, created = Product.objects.get_or_create(
                seller_id=seller_id,
                title=title,
                defaults={
                    'category': category,
                    'price': Decimal(price),
                    'mrp': Decimal(mrp) if mrp else None,
                    'quantity': quantity,
                }
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created product: {product.title}'))

        # Automatic discount and banner offer, running for 30 days
        Discount.objects.get_or_create(
            seller_id=seller_id,
            method=Discount.Method.AUTO,
            type=Discount.Type.PERCENTAGE,
            amount=Decimal('10'),
            defaults={'starts_at': now, 'ends_at': now + timedelta(days=30)}
        )
        Offer.objects.get_or_create(
            seller_id=seller_id,
            title='Festive Sale',
            defaults={'starts_at': now, 'ends_at': now + timedelta(days=30)}
        )

        # Shopper account
        shopper = StorefrontUser.objects.filter(seller_id=seller_id, email__iexact='shopper@demo.test').first()
        if shopper is None:
            shopper = StorefrontUser(seller_id=seller_id, name='Demo Shopper', email='shopper@demo.test')
            shopper.set_password('Demo1234@')
            shopper.save()
            self.stdout.write(self.style.SUCCESS(f'Created shopper: {shopper.email} / Demo1234@'))

        # Summary
        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(self.style.SUCCESS('   DEMO DATA LOADED SUCCESSFULLY!'))
        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(f'  Shop: {shop.name} (?shop={shop.slug}, X-User-Id: {seller_id})')
        self.stdout.write(f'  Products: {Product.objects.filter(seller_id=seller_id).count()}')
        self.stdout.write(f'  Discounts: {Discount.objects.filter(seller_id=seller_id).count()}')
        self.stdout.write(f'  Offers: {Offer.objects.filter(seller_id=seller_id).count()}')
        self.stdout.write(self.style.WARNING('  Shopper: shopper@demo.test / Demo1234@'))
