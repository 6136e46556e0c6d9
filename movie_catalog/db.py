"""
This module handles the connection to the MongoDB database.
It builds the client once at startup and hands out the movie collection.
A failed first contact with the server is logged, not raised: the app
still starts and requests fail at the store layer until Mongo is reachable.
movie_catalog.db.py
"""
import logging

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from movie_catalog.config import Settings

logger = logging.getLogger(__name__)


def connect(settings: Settings) -> MongoClient:
    client = MongoClient(settings.mongo_url, serverSelectionTimeoutMS=settings.mongo_timeout_ms)
    try:
        client.admin.command("ping")
        logger.info("MongoDB connection successful (db=%s)", settings.db_name)
    except PyMongoError as e:
        logger.error("Database connection error: %s", e)
    return client


def get_movie_collection(client: MongoClient, settings: Settings) -> Collection:
    return client[settings.db_name][settings.collection_name]
