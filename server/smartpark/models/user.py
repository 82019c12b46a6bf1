from server.smartpark.extensions import db
from server.smartpark.utils import utcnow


class User(db.Model):
    __tablename__ = "users"

    user_id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="staff")
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "UserID": self.user_id,
            "Username": self.username,
            "Role": self.role,
            "CreatedAt": self.created_at.isoformat() if self.created_at else None,
        }
