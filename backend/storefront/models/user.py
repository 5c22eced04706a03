"""
Storefront Backend: User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.

The `password` column is written by PATCH /user/{id} and is never selected
by any read path. Reads go through an explicit column list (id, email, name)
rather than loading the whole entity.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        # Password deliberately left out of the repr so it never reaches logs
        return f"<User(id='{self.id}', email='{self.email}')>"
