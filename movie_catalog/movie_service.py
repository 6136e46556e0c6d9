"""This module serves as the store layer for the movie collection, providing
operations to list, look up, create, update and delete movie documents.
MovieStore wraps a pymongo collection handed to it at startup and converts
driver failures into StoreError, keeping "not found" (None) separate from
"the database call failed".
movie_catalog.movie_service.py
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, field_validator
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from movie_catalog.errors import StoreError

logger = logging.getLogger(__name__)


class MovieFields(BaseModel):
    """The four fields a client may set. Blank values count as absent."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    Title: str
    Poster: Optional[str] = None
    Released: Optional[str] = None
    Metascore: Optional[Union[int, float]] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Movie(BaseModel):
    """A stored record, shown as found: older documents may hold dates or "N/A" scores."""
    id: str
    Title: Any = None
    Poster: Any = None
    Released: Any = None
    Metascore: Any = None


def to_movie(doc: Mapping[str, Any]) -> Movie:
    return Movie(
        id=str(doc["_id"]),
        Title=doc.get("Title"),
        Poster=doc.get("Poster"),
        Released=doc.get("Released"),
        Metascore=doc.get("Metascore"),
    )


def is_valid_id(value: str) -> bool:
    """True when value has the shape of a Mongo ObjectId (24 hex chars)."""
    return isinstance(value, str) and ObjectId.is_valid(value)


def lookup_filter(id_or_title: str) -> Dict[str, Any]:
    # Id detection wins: a title that looks like an ObjectId can't be found by title.
    if is_valid_id(id_or_title):
        return {"_id": ObjectId(id_or_title)}
    return {"Title": id_or_title}


class MovieStore:
    def __init__(self, collection: Collection):
        self.collection = collection

    def find_all(self) -> List[Movie]:
        try:
            return [to_movie(doc) for doc in self.collection.find()]
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def find_one(self, filter: Mapping[str, Any]) -> Optional[Movie]:
        try:
            doc = self.collection.find_one(dict(filter))
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if not doc:
            return None
        return to_movie(doc)

    def find_by_id(self, movie_id: str) -> Optional[Movie]:
        if not is_valid_id(movie_id):
            return None
        return self.find_one({"_id": ObjectId(movie_id)})

    def insert(self, fields: MovieFields) -> Movie:
        doc = fields.model_dump()
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        logger.debug("Inserted movie %s", result.inserted_id)
        return to_movie({**doc, "_id": result.inserted_id})

    def update_by_id(self, movie_id: str, fields: MovieFields) -> Optional[Movie]:
        if not is_valid_id(movie_id):
            return None
        # all four fields are written; anything not supplied is cleared
        update_data = fields.model_dump()
        try:
            doc = self.collection.find_one_and_update(
                {"_id": ObjectId(movie_id)},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if not doc:
            return None
        return to_movie(doc)

    def delete_by_id(self, movie_id: str) -> None:
        if not is_valid_id(movie_id):
            return
        try:
            result = self.collection.delete_one({"_id": ObjectId(movie_id)})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        logger.debug("Deleted %d movie(s) for id %s", result.deleted_count, movie_id)
