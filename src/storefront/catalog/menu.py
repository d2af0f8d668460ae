"""Default catalog — the canteen menu a fresh session starts with."""

DEFAULT_MENU = [
    {
        "id": "1",
        "name": "Vada Pao",
        "price": 25,
        "description": "Mumbai's favorite street food with spicy potato filling",
        "image_ref": "/vada-pao-mumbai-street-food.jpg",
        "stock": 15,
        "category": "snacks",
        "rating": 4.5,
    },
    {
        "id": "2",
        "name": "Filter Coffee",
        "price": 30,
        "description": "Authentic South Indian filter coffee with perfect blend",
        "image_ref": "/south-indian-filter-coffee.jpg",
        "stock": 20,
        "category": "beverages",
        "rating": 4.8,
    },
    {
        "id": "3",
        "name": "Rajma Rice",
        "price": 80,
        "description": "Hearty kidney bean curry served with steamed basmati rice",
        "image_ref": "/rajma-rice-indian-curry.jpg",
        "stock": 12,
        "category": "meals",
        "rating": 4.6,
    },
    {
        "id": "4",
        "name": "Masala Dosa",
        "price": 60,
        "description": "Crispy crepe filled with spiced potato mixture",
        "image_ref": "/masala-dosa-south-indian.png",
        "stock": 8,
        "category": "meals",
        "rating": 4.7,
    },
    {
        "id": "5",
        "name": "Chai",
        "price": 15,
        "description": "Traditional Indian spiced tea",
        "image_ref": "/indian-chai-tea.jpg",
        "stock": 25,
        "category": "beverages",
        "rating": 4.4,
    },
]
