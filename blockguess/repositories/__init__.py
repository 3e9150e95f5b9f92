from .counter_repository import CounterRepository
from .round_repository import RoundRepository
from .guess_repository import GuessRepository
from .user_stat_repository import UserStatRepository
from .checkin_repository import CheckInRepository
from .event_log_repository import EventLogRepository
from .prize_config_repository import PrizeConfigRepository
from .chat_repository import ChatRepository

__all__ = [
    "CounterRepository",
    "RoundRepository",
    "GuessRepository",
    "UserStatRepository",
    "CheckInRepository",
    "EventLogRepository",
    "PrizeConfigRepository",
    "ChatRepository",
]
