from fastapi import Depends
from redis import Redis

from .config import REDIS_DB, REDIS_HOST, REDIS_PORT
from .preferences import PreferenceStore, RedisPreferenceStore

# simple global redis client (sync)
redis_client = Redis(host=REDIS_HOST, port=REDIS_PORT, db=REDIS_DB, decode_responses=True)


def get_redis() -> Redis:
    return redis_client


def get_preference_store(r: Redis = Depends(get_redis)) -> PreferenceStore:
    return RedisPreferenceStore(r)
