"""User model."""
from datetime import datetime
from taskmanager.extensions import db
from taskmanager.models.task import isoformat_utc

ROLES = ('admin', 'member')


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    profile_image_url = db.Column(db.String(500))
    role = db.Column(db.String(20), nullable=False, default='member')  # admin, member
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        """Public representation; never includes the password hash."""
        return {
            '_id': str(self.id),
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'profileImageUrl': self.profile_image_url,
            'createdAt': isoformat_utc(self.created_at),
            'updatedAt': isoformat_utc(self.updated_at),
        }

    def to_summary(self):
        """The subset shown wherever a user is embedded in a task."""
        return {
            '_id': str(self.id),
            'name': self.name,
            'email': self.email,
            'profileImageUrl': self.profile_image_url,
        }
