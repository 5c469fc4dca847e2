"""
Order documents as read from the content store.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

FILTER_ALL = 'All'
ORDER_STATUSES = ('pending', 'dispatch', 'success')
STATUS_FILTERS = (FILTER_ALL,) + ORDER_STATUSES
STATUS_LABELS = {
    'pending': 'Pending',
    'dispatch': 'Dispatch',
    'success': 'Completed',
}

# Every order with its cart line items dereferenced
ORDERS_QUERY = """*[_type == "order"]{
  _id,
  firstName,
  lastName,
  phone,
  email,
  address,
  city,
  zipCode,
  total,
  discount,
  orderDate,
  status,
  cartItems[]->{
    productName,
    image
  }
}"""


@dataclass(frozen=True)
class CartItem:
    product_name: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> 'CartItem':
        # Dangling references dereference to null
        doc = doc or {}
        return cls(product_name=doc.get('productName'), image=doc.get('image'))

    def to_dict(self) -> Dict[str, Any]:
        return {'productName': self.product_name, 'image': self.image}


@dataclass(frozen=True)
class Order:
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    total: Optional[float] = None
    discount: Optional[float] = None
    order_date: Optional[str] = None
    status: Optional[str] = None
    cart_items: List[CartItem] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> 'Order':
        return cls(
            id=doc['_id'],
            first_name=doc.get('firstName'),
            last_name=doc.get('lastName'),
            phone=doc.get('phone'),
            email=doc.get('email'),
            address=doc.get('address'),
            city=doc.get('city'),
            zip_code=doc.get('zipCode'),
            total=doc.get('total'),
            discount=doc.get('discount'),
            order_date=doc.get('orderDate'),
            status=doc.get('status'),
            cart_items=[CartItem.from_document(item) for item in doc.get('cartItems') or []],
        )

    def with_status(self, status: str) -> 'Order':
        return replace(self, status=status)

    @property
    def customer_name(self) -> str:
        return ' '.join(part for part in (self.first_name, self.last_name) if part)

    @property
    def date_display(self) -> str:
        """Order date as MM/DD/YYYY, or the raw value when it does not parse"""
        if not self.order_date:
            return ''
        try:
            parsed = datetime.fromisoformat(self.order_date.replace('Z', '+00:00'))
        except ValueError:
            return self.order_date
        return parsed.strftime('%m/%d/%Y')

    @property
    def total_display(self) -> str:
        return f"${self.total}" if self.total is not None else ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'phone': self.phone,
            'email': self.email,
            'address': self.address,
            'city': self.city,
            'zipCode': self.zip_code,
            'total': self.total,
            'discount': self.discount,
            'orderDate': self.order_date,
            'status': self.status,
            'cartItems': [item.to_dict() for item in self.cart_items],
        }
