"""Profile media replacement."""

import logging
from typing import Optional

from fastapi import UploadFile

from core.storage.s3 import S3Storage
from database.models.principals import Principal, PrincipalKind

logger = logging.getLogger(__name__)

# Upload slot -> (url column, key column)
MEDIA_COLUMNS: dict[str, tuple[str, str]] = {
    "profile_pic": ("profile_pic_url", "profile_pic_key"),
    "front": ("front_image_url", "front_image_key"),
    "left": ("left_image_url", "left_image_key"),
    "right": ("right_image_url", "right_image_key"),
    "video": ("video_url", "video_key"),
}

MEDIA_SLOTS_BY_KIND: dict[PrincipalKind, tuple[str, ...]] = {
    PrincipalKind.HIRER: ("profile_pic",),
    PrincipalKind.TALENT: ("front", "left", "right", "profile_pic", "video"),
}

MEDIA_FOLDERS: dict[PrincipalKind, str] = {
    PrincipalKind.HIRER: "hirer_profiles",
    PrincipalKind.TALENT: "talent_profiles",
}


def media_url(principal: Principal, slot: str) -> Optional[str]:
    url_column, _ = MEDIA_COLUMNS[slot]
    return getattr(principal, url_column, None)


async def replace_media(
    storage: S3Storage,
    principal: Principal,
    uploads: dict[str, UploadFile],
) -> list[str]:
    """
    Replace stored media for each uploaded slot.

    For each slot the old object is deleted first and the new one uploaded
    after, one slot at a time. A failure part way leaves earlier slots
    replaced; nothing is rolled back. The new url/key are set on the
    principal but not committed.

    Returns:
        The slots that were replaced
    """
    kind = PrincipalKind(principal.kind)
    folder = f"{MEDIA_FOLDERS[kind]}/{principal.id}"
    replaced = []

    for slot in MEDIA_SLOTS_BY_KIND[kind]:
        upload = uploads.get(slot)
        if upload is None:
            continue

        url_column, key_column = MEDIA_COLUMNS[slot]
        old_key = getattr(principal, key_column)
        if old_key:
            logger.info(f"Deleting previous {slot} media for {kind.value} {principal.id}")
            await storage.delete(old_key)
            setattr(principal, url_column, None)
            setattr(principal, key_column, None)

        data = await upload.read()
        stored = await storage.upload(
            data,
            storage.build_key(folder, slot, upload.filename),
            content_type=upload.content_type,
        )
        setattr(principal, url_column, stored.url)
        setattr(principal, key_column, stored.key)
        replaced.append(slot)

    return replaced
