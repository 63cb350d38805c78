"""
Contact Message Model
"""

from mulone_site.extensions import db

STATUS_PENDING = 'pending'
STATUS_REPLIED = 'replied'


class Message(db.Model):
    """Message sent through the landing page contact form"""
    __tablename__ = 'messages'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.Text)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), default=STATUS_PENDING)
    reply = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp(), index=True)

    def __repr__(self):
        return f'<Message {self.id} from {self.email}>'
