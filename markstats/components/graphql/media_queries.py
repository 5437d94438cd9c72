"""GraphQL query definitions for the two item kinds that carry a mark count."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from markstats.helpers.dto.stats_dto import ItemKind

SCENE_QUERY = """
query FindScenesWithMarkCount($scene_filter: SceneFilterType) {
  findScenes(scene_filter: $scene_filter) {
    count
    scenes {
      id
      title
      o_counter
      date
      tags { id, name }
    }
  }
}
"""

IMAGE_QUERY = """
query FindImagesWithMarkCount($image_filter: ImageFilterType) {
  findImages(image_filter: $image_filter) {
    count
    images {
      id
      title
      o_counter
      date
      tags { id, name }
    }
  }
}
"""

# Mark count strictly greater than zero
MARK_COUNT_FILTER: dict[str, Any] = {
    "o_counter": {
        "value": 0,
        "modifier": "GREATER_THAN",
    },
}


@dataclass(frozen=True)
class MediaQuery:
    """Everything needed to fetch and unpack one item kind."""

    kind: ItemKind
    query: str
    filter_variable: str  # e.g. "scene_filter"
    result_field: str  # e.g. "findScenes"
    items_field: str  # e.g. "scenes"

    def variables(self) -> dict[str, Any]:
        return {self.filter_variable: {**MARK_COUNT_FILTER}}


MEDIA_QUERIES: tuple[MediaQuery, ...] = (
    MediaQuery(
        kind=ItemKind.SCENE,
        query=SCENE_QUERY,
        filter_variable="scene_filter",
        result_field="findScenes",
        items_field="scenes",
    ),
    MediaQuery(
        kind=ItemKind.IMAGE,
        query=IMAGE_QUERY,
        filter_variable="image_filter",
        result_field="findImages",
        items_field="images",
    ),
)
