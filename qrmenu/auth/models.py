from enum import Enum
from sqlalchemy import Column, String, Uuid, Enum as SAEnum
from qrmenu.database import Base
from qrmenu.shared.models import AuditMixin


class UserRole(str, Enum):
    OWNER = "owner"
    SUPER_ADMIN = "super_admin"


class Profile(Base, AuditMixin):
    """Role record for a user of the hosted auth provider.

    Rows are kept in sync by the provider's sign-up hook; this service only
    reads them to decide what the bearer of a token may do.
    """
    __tablename__ = "profiles"

    user_id = Column(Uuid(as_uuid=True), unique=True, index=True, nullable=False)
    email = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    role = Column(
        SAEnum(UserRole, values_callable=lambda e: [m.value for m in e]),
        default=UserRole.OWNER,
        nullable=False,
    )
