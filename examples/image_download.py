#!/usr/bin/env python3
"""
Image decoding example.

Downloads an image and decodes it with Pillow. Requires the vision extra:

    pip install reactive-httpx[vision]
    python examples/image_download.py
"""

import asyncio

import httpx

from reactive_httpx import (
    ImageMappingError,
    filter_status_code,
    first_value,
    from_awaitable,
    map_image,
)

URL = "https://httpbin.org/image/png"


async def main() -> None:
    async with httpx.AsyncClient() as client:
        try:
            image = await first_value(
                from_awaitable(lambda: client.get(URL)).pipe(
                    filter_status_code(200),
                    map_image(),
                )
            )
        except ImageMappingError:
            print("Server did not return a decodable image")
            return
        print(f"Decoded {image.format} image, size={image.size}")


if __name__ == "__main__":
    asyncio.run(main())
