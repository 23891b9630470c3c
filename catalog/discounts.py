"""
Automatic discount evaluation.

Given a product and the seller's running ``auto`` discounts, pick the one
that gives the buyer the lowest price. Everything here except
``active_auto_discounts`` is a pure function of its arguments.
"""
from collections import namedtuple
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.db.models import Q
from django.utils import timezone

from .models import Discount


TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0')
HUNDRED = Decimal('100')

DiscountResult = namedtuple('DiscountResult', ['discounted_price', 'discount'])


def is_discount_active(discount, now=None):
    """
    Active means status Active and ``now`` inside [starts_at, ends_at].
    Both bounds are inclusive and an unset bound is open.
    """
    if now is None:
        now = timezone.now()
    if discount.status != Discount.Status.ACTIVE:
        return False
    if discount.starts_at is not None and discount.starts_at > now:
        return False
    if discount.ends_at is not None and discount.ends_at < now:
        return False
    return True


def applies_to_product(discount, product_id):
    """An empty product list means the discount covers the whole catalog."""
    product_ids = discount.product_ids or []
    if not product_ids:
        return True
    return str(product_id) in {str(pid) for pid in product_ids}


def apply_discount(price, discount):
    """
    Price after ``discount``, floored at zero and rounded to 2 places.
    Returns None when the result is not a finite number.
    """
    try:
        price = Decimal(str(price))
        amount = Decimal(str(discount.amount))

        if discount.type == Discount.Type.PERCENTAGE:
            trial = price * (1 - amount / HUNDRED)
        elif discount.type == Discount.Type.FIXED:
            trial = price - amount
        else:
            return None

        if not trial.is_finite():
            return None
        return max(trial, ZERO).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None


def best_discount(product, discounts):
    """
    Return DiscountResult for the discount giving the lowest price, or None.
    Ties keep the first discount seen.
    """
    best = None
    for discount in discounts:
        if not applies_to_product(discount, product.id):
            continue
        trial = apply_discount(product.price, discount)
        if trial is None:
            continue
        if best is None or trial < best.discounted_price:
            best = DiscountResult(trial, discount)
    return best


def active_auto_discounts(seller_id, now=None):
    """The seller's automatic discounts running at ``now``, oldest first."""
    if now is None:
        now = timezone.now()
    queryset = (
        Discount.objects
        .filter(seller_id=seller_id, method=Discount.Method.AUTO, status=Discount.Status.ACTIVE)
        .filter(Q(starts_at__isnull=True) | Q(starts_at__lte=now))
        .filter(Q(ends_at__isnull=True) | Q(ends_at__gte=now))
        .order_by('created_at')
    )
    return [discount for discount in queryset if is_discount_active(discount, now)]
