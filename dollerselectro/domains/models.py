"""
Shapes of the JSON documents the backend returns.

These are declarations only; the client passes plain dicts around and does not
validate them. Keys keep the backend's camelCase.
"""

from __future__ import annotations

from typing import Any, TypedDict


class Address(TypedDict, total=False):
    type: str  # home | work | other
    street: str
    city: str
    state: str
    zipCode: str
    country: str
    isDefault: bool


class User(TypedDict, total=False):
    id: str
    _id: str
    email: str
    firstName: str
    lastName: str
    username: str
    role: str  # customer | admin | employee
    phone: str
    isActive: bool
    isEmailVerified: bool
    isPhoneVerified: bool
    isTemporaryPassword: bool
    twoFactorEnabled: bool
    addresses: list[Address]
    preferences: dict[str, Any]
    createdAt: str
    lastLogin: str


class AuthTokens(TypedDict, total=False):
    accessToken: str
    refreshToken: str


class ProductImage(TypedDict, total=False):
    url: str
    alt: str
    isPrimary: bool


class Product(TypedDict, total=False):
    _id: str
    id: str
    name: str
    description: str
    price: float
    originalPrice: float
    category: str
    subcategory: str
    brand: str
    sku: str
    stock: int
    lowStockThreshold: int
    images: list[ProductImage]
    tags: list[str]
    isActive: bool
    isFeatured: bool
    isOnSale: bool
    createdAt: str


class OrderItem(TypedDict, total=False):
    product: Any
    name: str
    price: float
    quantity: int
    total: float


class Order(TypedDict, total=False):
    _id: str
    id: str
    orderNumber: str
    customer: Any
    items: list[OrderItem]
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float
    status: str  # pending | confirmed | processing | shipped | delivered | cancelled | refunded
    payment: dict[str, Any]  # method, status, transactionId
    delivery: dict[str, Any]  # method, status, trackingNumber, carrier
    orderDate: str
    estimatedDeliveryDate: str
    notes: str


class Reply(TypedDict, total=False):
    _id: str
    message: str
    isInternal: bool
    repliedBy: dict[str, Any]
    createdAt: str


class Message(TypedDict, total=False):
    _id: str
    name: str
    email: str
    phone: str
    subject: str
    message: str
    category: str
    status: str  # open | in_progress | resolved | closed
    priority: str  # low | medium | high | urgent
    assignedTo: dict[str, Any]
    replies: list[Reply]
    typingUsers: list[dict[str, Any]]
    createdAt: str
    updatedAt: str


class Notification(TypedDict, total=False):
    _id: str
    id: str
    title: str
    message: str
    type: str  # message_reply | order_update | ...
    isRead: bool
    readAt: str
    relatedMessage: Any
    relatedOrder: Any
    createdAt: str


class LowStockAlert(TypedDict, total=False):
    id: str
    product: dict[str, Any]
    currentStock: int
    threshold: int
    status: str  # active | acknowledged | resolved | dismissed
    priority: str  # low | medium | high | critical
    message: str
    alertType: str  # low_stock | out_of_stock | reorder_point
    createdAt: str
    urgencyScore: float
    ageInDays: int


class NewsletterSubscription(TypedDict, total=False):
    _id: str
    email: str
    status: str
    preferences: dict[str, Any]
    subscribedAt: str


class Question(TypedDict, total=False):
    _id: str
    question: str
    type: str
    options: list[dict[str, Any]]
    explanation: str
    points: int


class Quiz(TypedDict, total=False):
    _id: str
    title: str
    description: str
    category: str
    difficulty: str
    timeLimit: int
    questions: list[Question]
    isActive: bool


class PromoCode(TypedDict, total=False):
    _id: str
    code: str
    description: str
    type: str  # percentage | fixed | free_shipping
    value: float
    minimumOrderAmount: float
    maximumDiscountAmount: float
    usageLimit: int  # -1 for unlimited
    usedCount: int
    validFrom: str
    validUntil: str
    isActive: bool
