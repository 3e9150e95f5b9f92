from .round import Round, RoundCreate, RoundFinalize
from .guess import Guess, GuessCreate
from .checkin import UserStat, CheckIn, CheckInRequest, CheckInResult, CheckInStatus
from .leaderboard import RoundLeaderboardEntry, WeeklyCheckInEntry
from .event_log import LogEvent
from .prize_config import PrizeConfig, PrizeConfigUpdate
from .chat import ChatMessage, ChatMessageCreate

__all__ = [
    "Round",
    "RoundCreate",
    "RoundFinalize",
    "Guess",
    "GuessCreate",
    "UserStat",
    "CheckIn",
    "CheckInRequest",
    "CheckInResult",
    "CheckInStatus",
    "RoundLeaderboardEntry",
    "WeeklyCheckInEntry",
    "LogEvent",
    "PrizeConfig",
    "PrizeConfigUpdate",
    "ChatMessage",
    "ChatMessageCreate",
]
