import hashlib
import hmac

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

PAYSTACK_SECRET = "sk_test_integration"


def sign(body: bytes) -> str:
    """Paystack-style signature of a raw webhook body"""
    return hmac.new(PAYSTACK_SECRET.encode(), body, hashlib.sha512).hexdigest()


async def reload(session: AsyncSession, model, **filters):
    """Fetch rows straight from the database, bypassing stale identity-map state"""
    stmt = select(model).filter_by(**filters).execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalars().all()
