"""Models package."""

from .user import User
from .video import Video
from .comment import Comment
from .like import Like
from .tweet import Tweet
from .subscription import Subscription
from .watch_history import WatchHistoryEntry
