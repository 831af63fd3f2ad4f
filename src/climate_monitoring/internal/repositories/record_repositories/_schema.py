"""SQLAlchemy Core table definitions for the record store."""

import sqlalchemy as sa

from climate_monitoring.internal import entities

metadata = sa.MetaData()

cities = sa.Table(
    "cities",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
    sa.Column("name", sa.String(200), nullable=False),
    sa.Column("ascii_name", sa.String(200), nullable=False),
    sa.Column("country_code", sa.String(8), nullable=False),
    sa.Column("country_name", sa.String(100), nullable=False),
    sa.Column("latitude", sa.Float, nullable=False),
    sa.Column("longitude", sa.Float, nullable=False),
    sa.Index("ix_cities_name", "name"),
)

operators = sa.Table(
    "operators",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True),
    sa.Column("name_surname", sa.String(200), nullable=False),
    sa.Column("tax_code", sa.String(16), nullable=False),
    sa.Column("email", sa.String(255), nullable=False),
    sa.Column("username", sa.String(100), nullable=False, unique=True),
    sa.Column("password", sa.String(64), nullable=False),
    # Not a foreign key: zero is the "no center" sentinel
    sa.Column("center_id", sa.Integer, nullable=False, server_default="0"),
)

centers = sa.Table(
    "centers",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True),
    sa.Column("center_name", sa.String(200), nullable=False),
    sa.Column("street", sa.String(200), nullable=False),
    sa.Column("street_number", sa.String(20), nullable=False),
    sa.Column("postal_code", sa.String(20), nullable=False),
    sa.Column("town", sa.String(100), nullable=False),
    sa.Column("district", sa.String(100), nullable=False),
    sa.Column("city_ids", sa.JSON, nullable=False),
    sa.UniqueConstraint(
        "center_name", "street", "street_number", "postal_code", "town", "district",
        name="uq_centers_address",
    ),
)

weather = sa.Table(
    "weather",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True),
    sa.Column("city_id", sa.Integer, sa.ForeignKey("cities.id"), nullable=False),
    sa.Column("center_id", sa.Integer, sa.ForeignKey("centers.id"), nullable=False),
    sa.Column("date", sa.Date, nullable=False),
    *(
        column
        for category in entities.Category
        for column in (
            sa.Column(f"{category}_score", sa.SmallInteger, nullable=True),
            sa.Column(f"{category}_comment", sa.String(entities.MAX_COMMENT_LENGTH), nullable=True),
        )
    ),
    sa.Index("ix_weather_city_id", "city_id"),
)
