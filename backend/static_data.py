# -*- coding: utf-8 -*-
# backend/static_data.py — menu e dati di contatto (statici, non modificabili dal bot)

MENU = {
    "winter": [
        {
            "name": "Soljanka 'Original'",
            "price": "6,50 €",
            "description": "Nach Originalrezept mit saurer Sahne, Zitrone & Toast",
            "highlight": True,
            "ddrOriginal": True,
        },
        {
            "name": "Wurstgulasch",
            "price": "6,50 €",
            "description": "Der Schulküchen-Klassiker: Jagdwurst, Tomatensauce, Spirelli",
            "highlight": False,
            "ddrOriginal": True,
        },
        {
            "name": "Panierte Jägerschnitzel",
            "price": "7,00 €",
            "description": "Mit Nudeln und Tomatensauce – wie früher",
            "highlight": True,
            "ddrOriginal": True,
        },
        {
            "name": "Tote Oma",
            "price": "9,50 €",
            "description": "Grützwurst auf Sauerkraut mit Salzkartoffeln",
            "highlight": False,
            "ddrOriginal": True,
        },
        {
            "name": "Kesselgulasch",
            "price": "9,50 €",
            "description": "Deftiges Gulasch aus dem Kessel",
            "highlight": False,
            "ddrOriginal": True,
        },
        {
            "name": "Senfeier",
            "price": "6,00 €",
            "description": "Klassisch mit Salzkartoffeln in feiner Senfsauce",
            "highlight": False,
            "ddrOriginal": True,
        },
        {
            "name": "Glühwein (0,2l)",
            "price": "3,50 €",
            "description": "Ohne Schuss. Mit Amaretto oder Rum: 4,50 €",
            "highlight": False,
            "ddrOriginal": False,
        },
    ],
    "summer": [
        {"name": "Pommes Frites", "price": "3,50 €", "description": "Goldgelb & knusprig, rot/weiß", "highlight": False},
        {
            "name": "Currywurst Spezial",
            "price": "4,50 €",
            "description": "Mit unserer geheimen Currysauce & Bäckerbrötchen",
            "highlight": True,
        },
        {"name": "Chicken Nuggets", "price": "4,90 €", "description": "6 Stück im Knuspermantel mit Dip", "highlight": False},
        {"name": "Thüringer Bratwurst", "price": "3,50 €", "description": "Frisch vom Grill im Brötchen", "highlight": False},
        {"name": "Eiskaffee", "price": "4,50 €", "description": "Große Kugel Vanilleeis mit Sahne", "highlight": False},
    ],
}

INFO = {
    "name": "Strandstübchen Neue Mühle",
    "address": {
        "street": "Küchenmeisterallee 33b",
        "postalCode": "15711",
        "city": "Königs Wusterhausen",
        "country": "Deutschland",
    },
    "coordinates": {"latitude": 52.297, "longitude": 13.645},
    "contact": {"phone": "+49 123 456789", "email": "info@strandstuebchen-neuemuehle.de"},
    "features": ["Parkplätze", "Barrierefrei"],
    "website": "https://strandstuebchen-neuemuehle.de",
}
