from enum import Enum
from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid, Enum as SAEnum
from sqlalchemy.orm import relationship
from qrmenu.database import Base
from qrmenu.shared.models import AuditMixin, JSONType


class BusinessStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"


# Public menu themes the renderer ships
THEME_IDS = ("classic", "minimal", "dark")


class Business(Base, AuditMixin):
    __tablename__ = "businesses"

    owner_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.user_id"), unique=True, nullable=False)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    theme_id = Column(String, default="minimal", nullable=False)
    logo_url = Column(String, nullable=True)
    primary_color = Column(String, nullable=True)

    # Trial / subscription window. Effective state is derived at read time.
    status = Column(
        SAEnum(BusinessStatus, values_callable=lambda e: [m.value for m in e]),
        default=BusinessStatus.ACTIVE,
        nullable=False,
    )
    expires_at = Column(DateTime, nullable=True)

    # Legacy inline design, the fallback when the QR pointer resolves to nothing
    design = Column(JSONType, nullable=True)
    # Weak reference into design_versions; no FK so a dangling value is legal
    qr_design_version_id = Column(Uuid(as_uuid=True), nullable=True)

    owner = relationship("qrmenu.auth.models.Profile")
    design_versions = relationship(
        "qrmenu.designs.models.DesignVersion",
        back_populates="business",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    categories = relationship(
        "qrmenu.menu.models.Category",
        back_populates="business",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
