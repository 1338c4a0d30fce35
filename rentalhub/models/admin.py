from rentalhub.extensions import db
from .account import AccountMixin

DEFAULT_AVATAR = (
    "https://www.hotelbooqi.com/wp-content/uploads/2021/12/"
    "128-1280406_view-user-icon-png-user-circle-icon-png.png"
)

ADMIN_ROLES = ("admin", "super_admin")


class Admin(AccountMixin, db.Model):
    __tablename__ = "admins"

    name = db.Column(db.String(32), nullable=True, index=True)
    role = db.Column(db.String(20), nullable=False, default="admin")
    avatar = db.Column(db.String(500), nullable=False, default=DEFAULT_AVATAR)
    permission = db.Column(db.String(50), nullable=False, default="all")

    def __repr__(self) -> str:
        return f"<Admin id={self.id} email={self.email!r} role={self.role!r}>"

    def is_super_admin(self) -> bool:
        return self.role == "super_admin"

    def serialize(self):
        data = self._account_fields()
        data.update({
            "name": self.name,
            "avatar": self.avatar,
            "permission": self.permission,
        })
        return data
