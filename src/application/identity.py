from fastapi import Header, HTTPException


async def current_user_id(x_user_id: str = Header(default="")) -> str:
    """
    Stable user id issued by the identity provider, forwarded by the
    gateway in the ``X-User-Id`` header.
    """
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return user_id
