#!/usr/bin/env python3
"""Seed categories, metro stations, users and sample attractions.

Safe to re-run: existing rows (matched by email, name or slug) are left alone.
"""
import os
import sys
from datetime import datetime
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.core.database_init import initialize_database
from catalog.core.security import get_password_hash
from catalog.infrastructure.persistence.db import SessionLocal
from catalog.infrastructure.persistence import models
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

USERS = [
    ("admin@spb-attractions.ru", os.getenv("SEED_ADMIN_PASSWORD", "Admin123"), "admin"),
    ("user@example.com", os.getenv("SEED_USER_PASSWORD", "User1234"), "user"),
]

CATEGORIES = [
    ("Музеи и галереи", "museums-galleries", "#3B82F6",
     "Художественные музеи, галереи современного искусства и выставочные залы"),
    ("Дворцы и усадьбы", "palaces-estates", "#F59E0B",
     "Императорские дворцы, исторические усадьбы и парковые комплексы"),
    ("Храмы и соборы", "temples-cathedrals", "#10B981",
     "Православные храмы, соборы и другие религиозные сооружения"),
    ("Мосты и набережные", "bridges-embankments", "#8B5CF6",
     "Знаменитые мосты и живописные набережные города"),
    ("Парки и сады", "parks-gardens", "#EF4444",
     "Городские парки, ботанические сады и зоны отдыха"),
]

METRO_STATIONS = [
    ("Невский проспект", "blue", "Синяя линия"),
    ("Гостиный двор", "green", "Зеленая линия"),
    ("Адмиралтейская", "purple", "Фиолетовая линия"),
    ("Спасская", "orange", "Оранжевая линия"),
    ("Садовая", "purple", "Фиолетовая линия"),
    ("Василеостровская", "green", "Зеленая линия"),
    ("Горьковская", "purple", "Фиолетовая линия"),
]

# category and metro_station refer to the names above
ATTRACTIONS = [
    {
        "name": "Государственный Эрмитаж",
        "slug": "hermitage-museum",
        "short_description": "Один из крупнейших художественных и культурно-исторических музеев мира",
        "full_description": (
            "Государственный Эрмитаж — один из крупнейших художественных и культурно-исторических "
            "музеев России и мира. Первоначальная коллекция была приобретена Екатериной II в 1764 году."
        ),
        "address": "Дворцовая площадь, 2",
        "district": "Центральный",
        "latitude": 59.9398,
        "longitude": 30.3146,
        "working_hours": "Вт-Сб: 10:00-18:00, Вс: 10:00-17:00, Пн - выходной",
        "ticket_price": "от 400₽, льготный 200₽",
        "website": "https://hermitagemuseum.org",
        "phone": "+7 (812) 710-90-79",
        "distance_to_metro": 3,
        "wheelchair_accessible": True,
        "has_elevator": True,
        "has_audio_guide": True,
        "accessibility_notes": "Доступ для инвалидных колясок через служебный вход",
        "category": "Музеи и галереи",
        "metro_station": "Гостиный двор",
    },
    {
        "name": "Петропавловская крепость",
        "slug": "petropavlovsk-fortress",
        "short_description": "Историческое ядро Санкт-Петербурга, заложенное Петром I в 1703 году",
        "full_description": (
            "Петропавловская крепость — цитадель Санкт-Петербурга на Заячьем острове. "
            "Включает Петропавловский собор с усыпальницей российских императоров и множество музеев."
        ),
        "address": "Петропавловская крепость, 3",
        "district": "Петроградский",
        "latitude": 59.9496,
        "longitude": 30.3164,
        "working_hours": "Ежедневно: 06:00-21:00, музеи: 10:00-18:00",
        "ticket_price": "Вход на территорию бесплатный, музеи от 250₽",
        "website": "https://spbmuseum.ru",
        "phone": "+7 (812) 230-64-31",
        "distance_to_metro": 10,
        "has_audio_guide": True,
        "accessibility_notes": "Историческая брусчатка, есть пандусы в отдельных зданиях",
        "category": "Храмы и соборы",
        "metro_station": "Горьковская",
    },
    {
        "name": "Дворцовый мост",
        "slug": "palace-bridge",
        "short_description": "Разводной мост, соединяющий Дворцовую площадь с Васильевским островом",
        "full_description": (
            "Дворцовый мост — один из красивейших разводных мостов Санкт-Петербурга через Большую Неву. "
            "Построен в 1912-1916 годах, разводится ежедневно в период навигации."
        ),
        "address": "Дворцовый мост",
        "district": "Центральный",
        "latitude": 59.9387,
        "longitude": 30.3067,
        "working_hours": "Круглосуточно, разводка: 01:10-02:50",
        "ticket_price": "Бесплатно",
        "distance_to_metro": 5,
        "wheelchair_accessible": True,
        "accessibility_notes": "Пешеходные тротуары доступны для колясок",
        "category": "Мосты и набережные",
        "metro_station": "Адмиралтейская",
    },
    {
        "name": "Летний сад",
        "slug": "summer-garden",
        "short_description": "Старейший сад Санкт-Петербурга, заложенный по повелению Петра I в 1704 году",
        "full_description": (
            "Летний сад — памятник садово-паркового искусства первой трети XVIII века в центре "
            "Санкт-Петербурга, украшенный мраморными скульптурами XVII-XVIII веков."
        ),
        "address": "наб. Кутузова, 2",
        "district": "Центральный",
        "latitude": 59.9421,
        "longitude": 30.337,
        "working_hours": "Май-сентябрь: 10:00-22:00, октябрь-апрель: 10:00-20:00",
        "ticket_price": "Бесплатно",
        "website": "https://rusmuseum.ru",
        "phone": "+7 (812) 595-42-48",
        "distance_to_metro": 7,
        "wheelchair_accessible": True,
        "accessibility_notes": "Асфальтированные дорожки, есть пандусы",
        "category": "Парки и сады",
        "metro_station": "Гостиный двор",
    },
]


def seed_database():
    """Insert any seed rows that are missing."""
    if not initialize_database():
        logger.error("Could not create tables; aborting seed")
        return False

    session = SessionLocal()
    try:
        now = datetime.utcnow()

        logger.info("Seeding users...")
        users = {}
        for email, password, role in USERS:
            user = session.query(models.User).filter_by(email=email).first()
            if not user:
                user = models.User(
                    email=email,
                    password=get_password_hash(password),
                    role=role,
                    created_at=now,
                    updated_at=now,
                )
                session.add(user)
                session.flush()
            users[role] = user

        logger.info("Seeding categories...")
        categories = {}
        for name, slug, color, description in CATEGORIES:
            category = session.query(models.Category).filter_by(name=name).first()
            if not category:
                category = models.Category(
                    name=name, slug=slug, color=color, description=description,
                    created_at=now, updated_at=now,
                )
                session.add(category)
                session.flush()
            categories[name] = category

        logger.info("Seeding metro stations...")
        stations = {}
        for name, line_color, line_name in METRO_STATIONS:
            station = session.query(models.MetroStation).filter_by(name=name).first()
            if not station:
                station = models.MetroStation(name=name, line_color=line_color, line_name=line_name)
                session.add(station)
                session.flush()
            stations[name] = station

        logger.info("Seeding attractions...")
        created = 0
        for data in ATTRACTIONS:
            data = dict(data)
            if session.query(models.Attraction).filter_by(slug=data["slug"]).first():
                continue
            category = categories[data.pop("category")]
            station = stations[data.pop("metro_station")]
            session.add(models.Attraction(
                category_id=category.id,
                metro_station_id=station.id,
                created_by=users["admin"].id,
                is_published=True,
                created_at=now,
                updated_at=now,
                **data,
            ))
            created += 1

        session.commit()
        logger.info(f"✅ Seed complete: {created} new attractions")
        return True
    except Exception as e:
        logger.error(f"Error seeding database: {e}")
        session.rollback()
        return False
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(0 if seed_database() else 1)
