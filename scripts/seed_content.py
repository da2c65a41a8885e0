"""
Seed site content into a configured database.

Loads the default testimonials when the table is empty, adds any videos
given on the command line and can create a password admin account.

Usage:
    python scripts/seed_content.py
    python scripts/seed_content.py --video "Scheme overview" https://youtu.be/VIDEO_ID
    python scripts/seed_content.py --admin-email admin@example.com --admin-password secret123
"""
import argparse
import asyncio
import sys

from loguru import logger
from werkzeug.security import generate_password_hash

from suryaghar.content import DEFAULT_TESTIMONIALS
from suryaghar.core.backend import create_backend
from suryaghar.core.config import get_settings
from suryaghar.core.exceptions import AppException
from suryaghar.models import AdminUser, Testimonial, TestimonialCreate, Video, VideoCreate
from suryaghar.services.curation import create_testimonial, create_video


def parse_args():
    parser = argparse.ArgumentParser(description="Seed PM Surya Ghar site content")
    parser.add_argument(
        "--video",
        nargs=2,
        action="append",
        default=[],
        metavar=("TITLE", "URL"),
        help="add a video (repeatable)",
    )
    parser.add_argument("--admin-email", help="create or reset this admin account")
    parser.add_argument("--admin-password", help="password for --admin-email")
    return parser.parse_args()


async def seed(args) -> int:
    backend = create_backend(get_settings())
    if not backend.configured:
        logger.error("DATABASE_URL and STORAGE_DIR must be set to seed content")
        return 1

    await backend.init()
    try:
        async with backend.client() as client:
            if await client.count(Testimonial):
                logger.info("Testimonials already present, skipping defaults")
            else:
                for item in DEFAULT_TESTIMONIALS:
                    await create_testimonial(client, TestimonialCreate(**item))
                logger.info(f"Seeded {len(DEFAULT_TESTIMONIALS)} testimonials")

            known = {v.youtube_url for v in await client.select(Video)}
            for title, url in args.video:
                if url in known:
                    logger.info(f"Video already present: {url}")
                    continue
                await create_video(client, VideoCreate(title=title, youtube_url=url))
                logger.info(f"Added video: {title}")

            if args.admin_email:
                if not args.admin_password or len(args.admin_password) < 6:
                    logger.error("--admin-password of at least 6 characters is required")
                    return 1
                email = args.admin_email.lower()
                password_hash = generate_password_hash(args.admin_password)
                existing = await client.select(AdminUser, AdminUser.email == email, limit=1)
                if existing:
                    await client.update(AdminUser, existing[0].id, {"password_hash": password_hash})
                else:
                    await client.insert(AdminUser, {"email": email, "password_hash": password_hash})
                await client.commit()
                logger.info(f"Admin account ready: {email}")
    except AppException as e:
        logger.error(f"Seeding failed: {e.message}")
        return 1
    finally:
        await backend.close()
    return 0


def main():
    return asyncio.run(seed(parse_args()))


if __name__ == "__main__":
    sys.exit(main())
