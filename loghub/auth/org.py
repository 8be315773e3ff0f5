from fastapi import HTTPException, Request

ORG_HEADERS = ("Org-ID", "X-Org-ID")


def require_org():
    """Dependency resolving the calling organization from the request headers"""
    async def dep(request: Request):
        org_id = None
        for header in ORG_HEADERS:
            org_id = request.headers.get(header)
            if org_id:
                break

        if not org_id:
            raise HTTPException(status_code=400, detail="org_required")

        org_id = org_id.strip()
        if not org_id.isdigit():
            raise HTTPException(status_code=400, detail="invalid_org_id")

        # Stash for downstream
        request.state.org_id = org_id
        return org_id

    return dep
