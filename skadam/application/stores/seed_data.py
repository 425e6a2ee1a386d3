"""
Default catalog and quiz content used when storage holds nothing yet.

Prices use the legacy "8.50 TND" string form, which Money parses on load.
"""

DEFAULT_CATEGORIES = [
    {"id": "coffee", "name": "Coffee", "description": "Artisan coffee blends", "color": "#8B4513"},
    {"id": "tea", "name": "Tea & Beverages", "description": "Premium teas & drinks", "color": "#228B22"},
    {"id": "pastries", "name": "Pastries", "description": "Fresh baked goods", "color": "#DAA520"},
    {"id": "food", "name": "Food", "description": "Sandwiches & meals", "color": "#CD853F"},
]


def _cups(quantity, threshold, enabled=True):
    return {
        "quantity": quantity,
        "alert_threshold": threshold,
        "alert_enabled": enabled,
        "unit": "cups",
    }


DEFAULT_MENU_ITEMS = [
    {
        "id": "espresso",
        "name": "Classic Espresso",
        "description": "Rich, bold espresso shot made from our signature blend of premium coffee beans.",
        "price": "8.50 TND",
        "category_id": "coffee",
        "popular": True,
        "ingredients": ["Espresso beans", "Water"],
        "inventory": _cups(50, 10),
    },
    {
        "id": "cappuccino",
        "name": "Cappuccino",
        "description": "Espresso, steamed milk and velvety foam topped with cocoa powder.",
        "price": "11.50 TND",
        "category_id": "coffee",
        "popular": True,
        "ingredients": ["Espresso", "Steamed milk", "Milk foam", "Cocoa powder"],
        "inventory": _cups(35, 15),
    },
    {
        "id": "latte",
        "name": "Caffe Latte",
        "description": "Smooth espresso with steamed milk and a light layer of foam.",
        "price": "12.75 TND",
        "category_id": "coffee",
        "ingredients": ["Espresso", "Steamed milk", "Milk foam"],
        "inventory": _cups(8, 10),
    },
    {
        "id": "americano",
        "name": "Americano",
        "description": "Bold espresso shots diluted with hot water.",
        "price": "9.00 TND",
        "category_id": "coffee",
        "ingredients": ["Espresso", "Hot water"],
        "inventory": _cups(25, 5, enabled=False),
    },
    {
        "id": "mocha",
        "name": "Chocolate Mocha",
        "description": "Espresso, chocolate syrup and steamed milk topped with whipped cream.",
        "price": "14.00 TND",
        "category_id": "coffee",
        "ingredients": ["Espresso", "Chocolate syrup", "Steamed milk", "Whipped cream"],
        "inventory": _cups(20, 8),
    },
    {
        "id": "earl-grey",
        "name": "Earl Grey Tea",
        "description": "Black tea with bergamot oil, served with lemon and honey on the side.",
        "price": "8.00 TND",
        "category_id": "tea",
        "ingredients": ["Earl Grey tea", "Bergamot oil", "Lemon", "Honey"],
    },
    {
        "id": "chai-latte",
        "name": "Spiced Chai Latte",
        "description": "Black tea, warm spices and steamed milk.",
        "price": "11.00 TND",
        "category_id": "tea",
    },
    {
        "id": "croissant",
        "name": "Butter Croissant",
        "description": "Flaky, buttery croissant baked fresh daily.",
        "price": "8.00 TND",
        "category_id": "pastries",
        "popular": True,
    },
    {
        "id": "muffin",
        "name": "Blueberry Muffin",
        "description": "Moist muffin packed with fresh blueberries and a hint of vanilla.",
        "price": "10.50 TND",
        "category_id": "pastries",
    },
    {
        "id": "club-sandwich",
        "name": "Club Sandwich",
        "description": "Triple-decker sandwich with turkey, bacon, lettuce and tomato.",
        "price": "20.50 TND",
        "category_id": "food",
    },
    {
        "id": "avocado-toast",
        "name": "Avocado Toast",
        "description": "Smashed avocado on sourdough with cherry tomatoes and feta.",
        "price": "17.50 TND",
        "category_id": "food",
    },
]

DEFAULT_QUIZ_QUESTIONS = [
    {
        "id": "1",
        "question": "What is the main ingredient in espresso?",
        "options": ["Water", "Coffee beans", "Milk", "Sugar"],
        "correct_answer": 1,
    },
    {
        "id": "2",
        "question": "Which coffee drink contains equal parts espresso, steamed milk, and milk foam?",
        "options": ["Latte", "Cappuccino", "Americano", "Macchiato"],
        "correct_answer": 1,
    },
    {
        "id": "3",
        "question": 'What does "SKADAM" represent in our coffee shop?',
        "options": ["Quality coffee", "Fast service", "Low prices", "Large portions"],
        "correct_answer": 0,
    },
]
