"""
Models module - re-exports all models.

Importing this module registers every table with SQLModel.metadata:
    from app.models.models import Topic
"""
from app.models.topic import Topic
from app.models.subscriber import Subscriber
from app.models.topic_subscriber import TopicSubscriber

__all__ = [
    'Topic',
    'Subscriber',
    'TopicSubscriber',
]
