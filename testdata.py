"""
Static test data shared across scenarios, plus a few random generators.

Everything here is read-only; generators return fresh values on each call
and make no uniqueness promise.
"""
import random

from pydantic import BaseModel, ConfigDict


class UserData(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: str
    email: str
    first_name: str
    last_name: str


class ProductData(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: int
    description: str
    category: str
    sku: str


class OrderForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    city: str
    card: str
    month: str
    year: str


TEST_USERS = {
    "valid_user": UserData(
        username="joaquinprueba123",
        password="123",
        email="joaquinprueba123@example.com",
        first_name="Joaquin",
        last_name="Prueba",
    ),
    "invalid_user": UserData(
        username="invaliduser",
        password="wrongpassword",
        email="invalid@example.com",
        first_name="Invalid",
        last_name="User",
    ),
    "new_user": UserData(
        username="newuser",
        password="NewPass123!",
        email="newuser@example.com",
        first_name="New",
        last_name="User",
    ),
}

# Products listed by the shop's catalogue (prices in USD).
TEST_PRODUCTS = {
    "phone": ProductData(
        name="Samsung galaxy s6",
        price=360,
        description="The Samsung Galaxy S6 is powered by 1.5GHz octa-core Samsung Exynos 7420 processor",
        category="phone",
        sku="PHONE-001",
    ),
    "laptop": ProductData(
        name="Sony vaio i5",
        price=790,
        description="Sony is so confident that the VAIO S is a superior ultraportable laptop",
        category="notebook",
        sku="LAPTOP-001",
    ),
    "monitor": ProductData(
        name="Apple monitor 24",
        price=400,
        description="LED Cinema Display features a 27-inch glossy LED-backlit TFT active-matrix LCD display",
        category="monitor",
        sku="MONITOR-001",
    ),
}

ORDER_FORMS = {
    "default": OrderForm(
        name="Test User",
        country="Argentina",
        city="Buenos Aires",
        card="1234 5678 9012 3456",
        month="12",
        year="2025",
    ),
    "alternate": OrderForm(
        name="Jane Smith",
        country="Uruguay",
        city="Montevideo",
        card="4111 1111 1111 1111",
        month="06",
        year="2027",
    ),
}

SEARCH_TERMS = {
    "valid": ["samsung", "nokia", "sony", "apple", "macbook"],
    "invalid": ["xyz123nonexistent", "!@#$%^&*()", "", "   "],
    "special_characters": ["café", "naïve", "résumé", "测试", "тест"],
}

TEST_URLS = {
    "home": "/",
    "index": "/index.html",
    "product": "/prod.html",
    "cart": "/cart.html",
}

ERROR_MESSAGES = {
    "login": {
        "wrong_password": "Wrong password.",
        "unknown_user": "User does not exist.",
        "empty_fields": "Please fill out Username and Password.",
    },
    "general": {
        "network_error": "Network error. Please try again.",
        "server_error": "Server error. Please try again later.",
        "not_found": "Page not found",
        "unauthorized": "Unauthorized access",
    },
}

SUCCESS_MESSAGES = {
    "product_added": "Product added",
    "order_placed": "Thank you for your purchase!",
}

VIEWPORTS = {
    "desktop": {"width": 1920, "height": 1080},
    "laptop": {"width": 1280, "height": 720},
    "tablet": {"width": 768, "height": 1024},
    "mobile": {"width": 375, "height": 667},
}

PERFORMANCE_THRESHOLDS_MS = {
    "page_load": 5000,
    "api_response": 1000,
}


def generate_random_user():
    random_id = random.randint(0, 9999)
    return UserData(
        username=f"user{random_id}",
        password=f"Pass{random_id}!",
        email=f"user{random_id}@example.com",
        first_name=f"User{random_id}",
        last_name=f"Last{random_id}",
    )


def generate_random_product():
    random_id = random.randint(0, 9999)
    return ProductData(
        name=f"Product {random_id}",
        price=random.randint(10, 1009),
        description=f"Description for product {random_id}",
        category="Test Category",
        sku=f"SKU-{random_id}",
    )


def get_random_search_term():
    return random.choice(SEARCH_TERMS["valid"])


def get_random_error():
    return random.choice(list(ERROR_MESSAGES["general"].values()))
