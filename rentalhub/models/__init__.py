from rentalhub.extensions import db

from .account import AccountMixin, utcnow
from .landlord import Landlord
from .tenant import Tenant
from .admin import Admin
from .property import Property

PRINCIPAL_MODELS = {
    "landlord": Landlord,
    "tenant": Tenant,
    "admin": Admin,
}
