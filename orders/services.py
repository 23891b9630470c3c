"""
Checkout: match or create the seller's customer record, then write the order.

Both steps run in one database transaction, so a failed checkout leaves
neither a half-updated customer nor an order without items.
"""
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Q

from .models import Customer, CustomerAddress, Order, OrderItem

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = [
    'name', 'line1', 'line2', 'city', 'state', 'postal_code', 'country', 'phone', 'label'
]


def split_name(full_name):
    """First whitespace-separated token is the first name, the rest the last name."""
    parts = (full_name or '').split()
    if not parts:
        return '', ''
    return parts[0], ' '.join(parts[1:])


def address_key(address):
    """Addresses are the same place when line1, postal code and city match."""
    if isinstance(address, dict):
        values = (address.get('line1'), address.get('postal_code'), address.get('city'))
    else:
        values = (address.line1, address.postal_code, address.city)
    return tuple((value or '').strip().lower() for value in values)


def find_customer(seller_id, email=None, phone=None):
    """The seller's oldest customer with this email or phone, if any."""
    match = Q()
    if email:
        match |= Q(email__iexact=email)
    if phone:
        match |= Q(phone=phone)
    if not match:
        return None
    return (
        Customer.objects
        .filter(seller_id=seller_id)
        .filter(match)
        .order_by('created_at')
        .first()
    )


def add_address(customer, address, is_default):
    return CustomerAddress.objects.create(
        customer=customer,
        is_default=is_default,
        **{field: address.get(field) or '' for field in ADDRESS_FIELDS}
    )


def upsert_customer(seller_id, *, address, email=None, full_name=None):
    """
    Match the seller's customer by email or phone, or create one.

    A matched customer only gets blank profile fields filled in, and the
    address is appended when it differs from every saved one.

    Returns (customer, created).
    """
    email = (email or '').strip().lower()
    phone = (address.get('phone') or '').strip()
    first_name, last_name = split_name(full_name or address.get('name'))

    customer = find_customer(seller_id, email=email, phone=phone)

    if customer is None:
        customer = Customer.objects.create(
            seller_id=seller_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            status=Customer.Status.ACTIVE,
        )
        add_address(customer, address, is_default=True)
        logger.info(f"Created customer {customer.id} for seller {seller_id}")
        return customer, True

    updated_fields = []
    for field, value in (
        ('first_name', first_name),
        ('last_name', last_name),
        ('email', email),
        ('phone', phone),
    ):
        if value and not getattr(customer, field):
            setattr(customer, field, value)
            updated_fields.append(field)
    if updated_fields:
        customer.save(update_fields=updated_fields + ['updated_at'])

    existing = list(customer.addresses.all())
    new_key = address_key(address)
    if all(address_key(saved) != new_key for saved in existing):
        add_address(customer, address, is_default=not existing)

    logger.info(f"Matched customer {customer.id} for seller {seller_id}")
    return customer, False


def resolve_totals(items, totals):
    """Use the totals the client sent; derive whatever is missing from the items."""
    totals = dict(totals or {})
    if totals.get('subtotal') is None:
        totals['subtotal'] = sum(
            (item['price'] * (item.get('quantity') or 1) for item in items), Decimal('0.00')
        )
    totals.setdefault('gst', Decimal('0.00'))
    totals.setdefault('delivery', Decimal('0.00'))
    if totals.get('total') is None:
        totals['total'] = totals['subtotal'] + totals['gst'] + totals['delivery']
    return totals


def create_order(seller_id, *, items, shipping_address, totals=None, payment=None,
                 customer_email=None, customer_name=None):
    """
    Upsert the customer and write the order with its items.

    ``items``, ``totals``, ``payment`` and ``shipping_address`` are validated
    serializer data (snake_case keys).
    """
    payment = payment or {}
    email = (customer_email or shipping_address.get('email') or '').strip().lower()
    name = (customer_name or shipping_address.get('name') or '').strip()
    totals = resolve_totals(items, totals)

    with transaction.atomic():
        customer, _ = upsert_customer(
            seller_id,
            address=shipping_address,
            email=email,
            full_name=name,
        )

        order = Order.objects.create(
            seller_id=seller_id,
            customer=customer,
            customer_name=name,
            customer_email=email,
            shipping_address=dict(shipping_address),
            subtotal=totals['subtotal'],
            gst=totals['gst'],
            delivery=totals['delivery'],
            total=totals['total'],
            payment_method=payment.get('payment_method') or 'unknown',
            payment_status=payment.get('payment_status') or Order.PaymentStatus.PENDING,
            transaction_id=payment.get('transaction_id') or '',
        )

        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                product_id=str(item.get('product_id') or ''),
                name=item.get('name') or '',
                price=item['price'],
                quantity=item.get('quantity') or 1,
                image=item.get('image') or '',
            )
            for item in items
        ])

    logger.info(
        f"Created order {order.id} for seller {seller_id}: "
        f"{len(items)} item(s), total {order.total}"
    )
    return order


def update_order_payment(order, changes):
    """
    Apply payment changes (payment_status, transaction_id, payment_method).
    Applying the same changes twice leaves the order as after the first time.
    """
    changed = [field for field, value in changes.items() if getattr(order, field) != value]
    for field in changed:
        setattr(order, field, changes[field])
    if changed:
        order.save(update_fields=changed + ['updated_at'])
        logger.info(f"Updated payment of order {order.id}: {', '.join(changed)}")
    return order
