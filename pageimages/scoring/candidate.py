# pageimages/scoring/candidate.py
# Responsibility: Immutable facts about one image reference found on a page.

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class ImageCandidate(BaseModel):
    """
    An image embedded on a page, as reported by the rendering pipeline.

    standalone_width is the displayed width when the image is shown outside a gallery;
    gallery images leave it unset and are judged by their full width instead.
    """
    file_name: str
    standalone_width: Optional[int] = None
    full_width: int = 0
    full_height: int = 0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageCandidate":
        """
        Builds a candidate from either snake_case keys or the renderer's camelCase keys
        (filename, handlerWidth, fullwidth, fullheight).
        """
        if 'file_name' in data:
            return cls(**data)

        return cls(
            file_name=data['filename'],
            standalone_width=data.get('handlerWidth') or None,
            full_width=data.get('fullwidth') or 0,
            full_height=data.get('fullheight') or 0,
        )

    @property
    def is_standalone(self) -> bool:
        return bool(self.standalone_width)
