from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class EmbedId:
    kind: str  # "album" or "track"
    id: str


@dataclass(frozen=True)
class MediaMetadata:
    embed_markup: Optional[str] = None
    release_title: Optional[str] = None
    artist: Optional[str] = None
    thumbnail_url: Optional[str] = None
    genres: List[str] = field(default_factory=list)
    location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "embedMarkup": self.embed_markup,
            "releaseTitle": self.release_title,
            "artist": self.artist,
            "thumbnailUrl": self.thumbnail_url,
            "genres": list(self.genres),
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaMetadata":
        genres = data.get("genres") or []
        if not isinstance(genres, list):
            genres = []
        return cls(
            embed_markup=data.get("embedMarkup"),
            release_title=data.get("releaseTitle"),
            artist=data.get("artist"),
            thumbnail_url=data.get("thumbnailUrl"),
            genres=[str(g) for g in genres][:4],
            location=data.get("location"),
        )


@dataclass(frozen=True)
class Venue:
    name: str
    address: str = ""
    website: str = ""
    neighborhood: str = ""
    capacity: str = ""
    # Set for venues synthesized from a show row with no venues-table match
    stub: bool = False

    def to_dict(self) -> Dict[str, str]:
        if self.stub:
            return {"name": self.name}
        return {
            "name": self.name,
            "address": self.address,
            "website": self.website,
            "neighborhood": self.neighborhood,
            "capacity": self.capacity,
        }


@dataclass(frozen=True)
class Show:
    date: str
    venue: Venue
    title: str
    time: str = ""
    cost: str = ""
    age: str = ""
    link_url: str = ""
    image_url: str = ""
    details: str = ""
    multiples: str = ""
    media: tuple = ()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "date": self.date,
            "venue": self.venue.to_dict(),
            "title": self.title,
            "time": self.time,
            "cost": self.cost,
            "age": self.age,
            "linkUrl": self.link_url,
            "imageUrl": self.image_url,
            "details": self.details,
            "multiples": self.multiples,
        }
        if self.media:
            data["media"] = [m.to_dict() for m in self.media]
        return data
