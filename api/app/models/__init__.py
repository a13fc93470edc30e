"""
Models package.
"""
from app.models.topic import Topic
from app.models.subscriber import Subscriber
from app.models.topic_subscriber import TopicSubscriber

__all__ = [
    'Topic',
    'Subscriber',
    'TopicSubscriber',
]
