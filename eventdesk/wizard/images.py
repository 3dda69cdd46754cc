import asyncio
import base64
from dataclasses import dataclass
from typing import Awaitable, Callable


@dataclass(frozen=True)
class CoverFile:
    filename: str
    content: bytes
    content_type: str = "image/jpeg"
    file_id: str | None = None


PreviewLoader = Callable[[CoverFile], Awaitable[str]]


async def data_url_preview(file: CoverFile) -> str:
    return await asyncio.to_thread(_encode_data_url, file.content, file.content_type)


async def file_id_preview(file: CoverFile) -> str:
    if file.file_id:
        return file.file_id
    return await data_url_preview(file)


def _encode_data_url(content: bytes, content_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
