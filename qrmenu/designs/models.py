from sqlalchemy import Column, String, ForeignKey, Boolean, Uuid
from sqlalchemy.orm import relationship
from qrmenu.database import Base
from qrmenu.shared.models import AuditMixin, JSONType


class DesignVersion(Base, AuditMixin):
    __tablename__ = "design_versions"

    business_id = Column(ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)

    # The full design document; replaced wholesale on update
    design = Column(JSONType, nullable=False)

    # At most one per business, kept that way by DesignVersionService
    is_active = Column(Boolean, default=False, nullable=False)
    created_by = Column(Uuid(as_uuid=True), nullable=True)

    business = relationship("qrmenu.business.models.Business", back_populates="design_versions")
