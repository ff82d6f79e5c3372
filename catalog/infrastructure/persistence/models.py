"""SQLAlchemy models for the catalog tables."""
from sqlalchemy import (
    Column,
    BigInteger,
    String,
    Boolean,
    DECIMAL,
    Integer,
    Text,
    DateTime,
    Enum,
    ForeignKey,
    func,
)
from sqlalchemy.orm import relationship

from catalog.infrastructure.persistence.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(Enum("user", "admin", name="user_role"), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    # sha256 hex digest of the raw reset token; the token itself is never stored
    reset_password_token = Column(String(64), index=True)
    reset_password_expires = Column(DateTime)
    last_login_at = Column(DateTime)
    login_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    created_attractions = relationship("Attraction", back_populates="creator")


class Category(Base):
    __tablename__ = "categories"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text)
    color = Column(String(7))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    attractions = relationship("Attraction", back_populates="category")


class MetroStation(Base):
    __tablename__ = "metro_stations"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    line_color = Column(String(20), nullable=False)
    line_name = Column(String(100), nullable=False)

    attractions = relationship("Attraction", back_populates="metro_station")


class Attraction(Base):
    __tablename__ = "attractions"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    slug = Column(String(200), unique=True, nullable=False)
    short_description = Column(Text, nullable=False)
    full_description = Column(Text, nullable=False)
    address = Column(String(300), nullable=False)
    district = Column(String(100), index=True)
    latitude = Column(DECIMAL(10, 7))
    longitude = Column(DECIMAL(10, 7))
    working_hours = Column(String(200))
    ticket_price = Column(String(100))
    website = Column(String(500))
    phone = Column(String(20))
    distance_to_metro = Column(Integer)
    # Accessibility
    wheelchair_accessible = Column(Boolean, nullable=False, default=False)
    has_elevator = Column(Boolean, nullable=False, default=False)
    has_audio_guide = Column(Boolean, nullable=False, default=False)
    has_sign_language_support = Column(Boolean, nullable=False, default=False)
    accessibility_notes = Column(Text)
    is_published = Column(Boolean, nullable=False, default=True, index=True)
    category_id = Column(BigInteger, ForeignKey("categories.id"), nullable=False, index=True)
    metro_station_id = Column(BigInteger, ForeignKey("metro_stations.id"), index=True)
    created_by = Column(BigInteger, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="attractions")
    metro_station = relationship("MetroStation", back_populates="attractions")
    creator = relationship("User", back_populates="created_attractions")
    images = relationship(
        "Image",
        back_populates="attraction",
        cascade="all, delete-orphan",
        order_by="Image.id",
    )


class Image(Base):
    __tablename__ = "images"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    attraction_id = Column(BigInteger, ForeignKey("attractions.id"), nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    path = Column(String(500), nullable=False)
    size = Column(Integer, nullable=False)
    mime_type = Column(String(50), nullable=False)
    alt_text = Column(String(200))
    is_primary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())

    attraction = relationship("Attraction", back_populates="images")
