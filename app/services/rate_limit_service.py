import redis
from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL, RATE_LIMIT_PER_MINUTE, RATE_LIMIT_WINDOW_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA incr + expire przy pierwszym trafieniu, atomowo
_HIT_LUA = """
local count = redis.call('INCR', KEYS[1])
if count == 1 then
    redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return {count, redis.call('TTL', KEYS[1])}
"""


class RateLimitService:
    """
    -limit zapytan /cart/track na (ip, customer)
    -okno stale (fixed window) w redisie
    """

    def __init__(
        self,
        url: str | None = None,
        limit: int = RATE_LIMIT_PER_MINUTE,
        window: int = RATE_LIMIT_WINDOW_SECONDS,
    ):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.limit = limit
        self.window = window

    @redis_retry()
    def hit(self, client_ip: str, customer_id: str) -> tuple[bool, int]:
        """Zwraca (czy_dozwolone, sekundy_do_resetu_okna)."""
        key = f"ratelimit:cart_track:{client_ip}:{customer_id}"
        count, ttl = self.redis.eval(_HIT_LUA, 1, key, self.window)
        allowed = int(count) <= self.limit
        if not allowed:
            logger.warning(f"Rate limit exceeded for {key} ({count}/{self.limit})")
        return allowed, max(int(ttl), 0)
