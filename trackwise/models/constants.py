"""Seed data and display fallbacks shared across the app."""

from trackwise.models.entities import Category

APP_NAME = "Trackwise"

HOUSEHOLD_EXPENSE_CATEGORY_ID = "household_expenses"

# Shown when a foreign key points at something that no longer exists
UNKNOWN_CATEGORY_LABEL = "Uncategorized"
UNKNOWN_CATEGORY_COLOR = "#6C757D"
UNKNOWN_MEMBER_LABEL = "Unknown Member"

INITIAL_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="Food", icon="Utensils", color="#FF6384"),
    Category(id="groceries", name="Groceries", icon="ShoppingCart", color="#36A2EB"),
    Category(id="transport", name="Transportation", icon="CarFront", color="#FFCE56"),
    Category(id="housing", name="Housing", icon="Home", color="#4BC0C0"),
    Category(id="utilities", name="Utilities", icon="Lightbulb", color="#9966FF"),
    Category(id="entertainment", name="Entertainment", icon="Drama", color="#FF9F40"),
    Category(id="health", name="Healthcare", icon="HeartPulse", color="#E83E8C"),
    Category(id="shopping", name="Shopping", icon="ShoppingBag", color="#20C997"),
    Category(id="travel", name="Travel", icon="Plane", color="#FD7E14"),
    Category(id="education", name="Education", icon="BookOpen", color="#007BFF"),
    Category(id="personal_care", name="Personal Care", icon="Sparkles", color="#F76707"),
    Category(id="gifts", name="Gifts & Donations", icon="Gift", color="#845EF7"),
    Category(
        id=HOUSEHOLD_EXPENSE_CATEGORY_ID,
        name="Household Expenses",
        icon="ReceiptText",
        color="#607D8B",
    ),
    Category(id="other", name="Other", icon="Archive", color="#6C757D"),
)
