"""
Key service round-trip check.

Creates a key with a secret, then fetches it back by secret and by
long secret. Reads KEYSERVICE_* settings from the environment.

    KEYSERVICE_REALM_BASE_URL=https://id.example.com/auth/realms/demo \
        python scripts/verify_key_service.py my-secret
"""

import asyncio
import logging
import sys

from keyservice_client import KeyServiceClient, KeyServiceError, get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("verify_key_service")


async def verify_flow(secret: str) -> int:
    async with KeyServiceClient.from_settings(settings) as client:
        logger.info("Key service: %s", client.configuration.realm_base_url)

        try:
            created = await client.create_key_future(secret)
            logger.info("Created key %s", created.key_id)

            by_secret = await client.get_key_future(secret, created.key_id)
            if by_secret.key != created.key:
                logger.error("Key fetched by secret does not match created key")
                return 1
            logger.info("Fetched key %s by secret", by_secret.key_id)

            if created.long_secret:
                by_long_secret = await client.get_key_via_long_secret_future(
                    created.long_secret, created.key_id
                )
                if by_long_secret.key != created.key:
                    logger.error("Key fetched by long secret does not match created key")
                    return 1
                logger.info("Fetched key %s by long secret", by_long_secret.key_id)
            else:
                logger.warning("No long secret returned, skipping long secret check")

        except KeyServiceError as e:
            logger.error("Key service check failed: %s (%s)", e, e.kind.value)
            return 1

    logger.info("Key service round trip completed")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(f"usage: {sys.argv[0]} SECRET")
        sys.exit(2)
    sys.exit(asyncio.run(verify_flow(sys.argv[1])))
