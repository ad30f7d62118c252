from sqlalchemy import Column, String, ForeignKey, Boolean, Integer, Numeric
from sqlalchemy.orm import relationship
from qrmenu.database import Base
from qrmenu.shared.models import AuditMixin


class Category(Base, AuditMixin):
    __tablename__ = "categories"

    business_id = Column(ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    position = Column(Integer, default=0, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    image_url = Column(String, nullable=True)

    business = relationship("qrmenu.business.models.Business", back_populates="categories")
    items = relationship(
        "Item",
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Item(Base, AuditMixin):
    __tablename__ = "items"

    category_id = Column(ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String, nullable=True)
    available = Column(Boolean, default=True, nullable=False)
    position = Column(Integer, nullable=True)

    category = relationship("Category", back_populates="items")
