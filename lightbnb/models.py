from sqlalchemy import Column, Integer, String, Text, Date, Boolean, SmallInteger, ForeignKey

from .database import Base


# --- User Model ---
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    # Stored as a hash; this layer never sees the plain password
    password = Column(String(255), nullable=False)


# --- Property Model (Listing) ---
class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Listing details
    title = Column(String(255), nullable=False)
    description = Column(Text)
    thumbnail_photo_url = Column(String(255), nullable=False)
    cover_photo_url = Column(String(255), nullable=False)
    cost_per_night = Column(Integer, nullable=False, default=0)
    parking_spaces = Column(Integer, nullable=False, default=0)
    number_of_bathrooms = Column(Integer, nullable=False, default=0)
    number_of_bedrooms = Column(Integer, nullable=False, default=0)

    # Address
    country = Column(String(255), nullable=False)
    street = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    province = Column(String(255), nullable=False)
    post_code = Column(String(255), nullable=False)

    active = Column(Boolean, nullable=False, default=True)


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False)
    guest_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)


class PropertyReview(Base):
    __tablename__ = "property_reviews"

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False)
    # Only read in aggregate (AVG) by this layer
    rating = Column(SmallInteger, nullable=False, default=0)
    message = Column(Text)
