from typing import List, TYPE_CHECKING

from sqlalchemy import Float, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.comment import ProductComment


class Product(Base, TimestampMixin):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Float)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    favorite_count: Mapped[int] = mapped_column(Integer, default=0, index=True)

    # リレーションシップ
    comments: Mapped[List["ProductComment"]] = relationship(
        "ProductComment",
        back_populates="product",
        passive_deletes=True
    )
