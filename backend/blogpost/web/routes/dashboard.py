from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from blogpost.api.deps import db, session_actor
from blogpost.models.user import User
from blogpost.services import dashboard
from blogpost.web.templating import render

router = APIRouter(tags=["web"])


@router.get("/dashboard")
def user_dashboard(request: Request, s: Session = Depends(db), u: User = Depends(session_actor)):
    return render(request, "dashboard.html", {"actor": u, **dashboard.user_counts(s, u)})
