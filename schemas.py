"""
Atlas Arrow Admin Schemas

View records are the normalised shapes the admin screens work with. They are
built from store API responses by ``mappers`` and are never persisted here;
the store API owns every entity.

DTOs are request bodies accepted by the console. They validate the admin's
form input before anything is forwarded to the store API.
"""
from datetime import date
from typing import List, Optional, Dict, Any, Literal, get_args

from pydantic import BaseModel, Field, EmailStr

from config import DEFAULT_CARRIER

OrderStatus = Literal["processing", "confirmed", "shipped", "out_for_delivery", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "completed", "failed"]
ReviewStatus = Literal["approved", "pending", "rejected", "flagged"]
MessageStatus = Literal["new", "read", "replied", "closed"]
Role = Literal["admin", "customer"]
ProductCategory = Literal[
    "Biometric Devices",
    "GPS Trackers",
    "Printers",
    "Aadhaar Kits",
    "Business Equipment",
    "Accessories",
]

ORDER_STATUSES: List[str] = list(get_args(OrderStatus))
PAYMENT_STATUSES: List[str] = list(get_args(PaymentStatus))
PRODUCT_CATEGORIES: List[str] = list(get_args(ProductCategory))

INQUIRY_LABELS: Dict[str, str] = {
    "general": "General Inquiry",
    "sales": "Sales & Pricing",
    "support": "Technical Support",
    "partnership": "Partnership",
    "bulk_order": "Bulk Orders",
}


# Orders
class Customer(BaseModel):
    name: str = "Customer"
    email: str = "N/A"
    phone: str = "N/A"
    registered_address: Optional[Dict[str, Any]] = None


class OrderLine(BaseModel):
    name: str
    quantity: int = 1
    price: float = 0.0


class Tracking(BaseModel):
    carrier: Optional[str] = None
    current_location: Optional[str] = None
    estimated_delivery: Optional[str] = None  # ISO date string


class Order(BaseModel):
    id: str = Field(..., description="Order number, falls back to the store id")
    db_id: str
    customer: Customer
    items: List[OrderLine] = []
    status: str = "processing"
    payment_status: str = "pending"
    payment_method: Optional[str] = None
    transaction_id: str = ""
    total: float = 0.0
    shipping_address: Dict[str, Any] = {}
    order_date: Optional[str] = None
    tracking: Tracking = Field(default_factory=Tracking)


# Products
class Specification(BaseModel):
    key: str = ""
    value: str = ""


class Product(BaseModel):
    id: str
    name: str
    description: str = ""
    category: str = ""
    price: float = 0.0
    original_price: Optional[float] = None
    stock: int = 0
    sold: int = 0
    status: Literal["active", "inactive"] = "active"
    featured: bool = False
    images: List[str] = []
    specifications: List[Specification] = []
    features: List[str] = []
    brand: str = ""
    warranty: str = ""
    rating: float = 0.0
    num_reviews: int = 0
    created_at: Optional[str] = None


# Users
class UserPreferences(BaseModel):
    newsletter: bool = False
    sms: bool = False
    promotions: bool = False


class User(BaseModel):
    id: str
    name: str
    email: str = ""
    phone: str = "Not provided"
    role: str = "customer"
    status: Literal["active", "inactive"] = "active"
    registered_at: str
    last_active: str
    total_orders: int = 0
    total_spent: float = 0.0
    avatar: Optional[str] = None
    avatar_letter: str = "U"
    address: Dict[str, Any] = {}
    preferences: UserPreferences = Field(default_factory=UserPreferences)


# Reviews
class ReviewReply(BaseModel):
    text: str
    date: str
    by: str = "Admin"


class Review(BaseModel):
    id: str
    product_id: Optional[str] = None
    product_name: str = "Product"
    product_image: str = "/logo.png"
    user_id: Optional[str] = None
    user_name: str = "Anonymous"
    user_email: str = ""
    rating: int = Field(5, ge=1, le=5)
    title: str = ""
    comment: str = ""
    date: str
    status: str = "approved"
    helpful: int = 0
    reply: Optional[ReviewReply] = None


# Contact messages
class Message(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    company: Optional[str] = None
    inquiry_type: str = "general"
    inquiry_label: str = INQUIRY_LABELS["general"]
    subject: str = ""
    message: str = ""
    status: str = "new"
    created_at: Optional[str] = None


# Notifications
class Notification(BaseModel):
    id: str
    type: Literal["order", "stock", "user", "review", "message", "system"]
    title: str
    message: str
    time: str
    read: bool = False
    priority: Literal["high", "medium", "low"] = "low"


class NotificationPreferences(BaseModel):
    orders: bool = True
    stock: bool = True
    users: bool = True
    reviews: bool = True
    messages: bool = True
    system: bool = True
    email: bool = True
    push: bool = False


# Settings
class StoreSettings(BaseModel):
    storeName: str = "Atlas Arrow"
    tagline: str = "Biometric, GPS & Technology Solutions"
    email: str = "contact@atlasarrow.com"
    phone: str = "+91 98765 43210"
    address: str = "Golghar, Gorakhpur, Uttar Pradesh 273001"
    currency: Literal["INR", "USD", "EUR"] = "INR"
    timezone: str = "Asia/Kolkata"
    language: str = "en"


class NotificationSettings(BaseModel):
    orderNotifications: bool = True
    stockAlerts: bool = True
    userRegistrations: bool = True
    productReviews: bool = True
    contactMessages: bool = True
    dailyReport: bool = True
    weeklyReport: bool = False


class PaymentSettings(BaseModel):
    razorpayEnabled: bool = True
    razorpayKeyId: str = "rzp_test_xxxxx"
    razorpayKeySecret: str = "**********"
    codEnabled: bool = True
    bankTransferEnabled: bool = True
    bankName: str = "State Bank of India"
    accountNumber: str = "********1234"
    ifscCode: str = "SBIN0001234"


class ShippingSettings(BaseModel):
    freeShippingThreshold: float = Field(5000, ge=0)
    standardShipping: float = Field(100, ge=0)
    expressShipping: float = Field(250, ge=0)
    localDelivery: bool = True
    nationalDelivery: bool = True
    internationalDelivery: bool = False


class Settings(BaseModel):
    storeSettings: StoreSettings = Field(default_factory=StoreSettings)
    notificationSettings: NotificationSettings = Field(default_factory=NotificationSettings)
    paymentSettings: PaymentSettings = Field(default_factory=PaymentSettings)
    shippingSettings: ShippingSettings = Field(default_factory=ShippingSettings)


# Request bodies
class LoginDTO(BaseModel):
    email: EmailStr
    password: str


class OrderStatusDTO(BaseModel):
    status: OrderStatus


class PaymentStatusDTO(BaseModel):
    payment_status: PaymentStatus


class TrackingDTO(BaseModel):
    carrier: str = DEFAULT_CARRIER
    current_location: str = ""
    estimated_delivery: Optional[date] = None


class ProductDTO(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    category: ProductCategory = "Biometric Devices"
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    stock: int = Field(..., ge=0)
    brand: str = ""
    warranty: str = ""
    featured: bool = False
    specifications: List[Specification] = []
    features: List[str] = []
    image: str = ""

    def to_store_payload(self) -> Dict[str, Any]:
        """Shape the form the way the store API expects it.

        Blank specification rows and blank feature lines are dropped, and the
        single form image becomes the product's image list.
        """
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "originalPrice": self.original_price,
            "stock": self.stock,
            "brand": self.brand,
            "warranty": self.warranty,
            "featured": self.featured,
            "specifications": [s.model_dump() for s in self.specifications if s.key and s.value],
            "features": [f for f in self.features if f.strip()],
            "images": [self.image] if self.image else [],
        }


class UserRoleDTO(BaseModel):
    role: Role


class NotifyUsersDTO(BaseModel):
    subject: str = ""
    message: str = ""
    search: str = ""
    role: str = "all"
    status: str = "all"


class ReviewReplyDTO(BaseModel):
    reply: str


class MessageStatusDTO(BaseModel):
    status: MessageStatus


class MessageReplyDTO(BaseModel):
    reply_text: str = ""


class SettingsDTO(BaseModel):
    storeSettings: Optional[StoreSettings] = None
    notificationSettings: Optional[NotificationSettings] = None
    paymentSettings: Optional[PaymentSettings] = None
    shippingSettings: Optional[ShippingSettings] = None


class PasswordChangeDTO(BaseModel):
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""
