"""
Contact form and chat widget routes.
"""
from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from repufrenos.schemas.common import ActionResult
from repufrenos.schemas.contact import ChatInquiry, ContactForm
from repufrenos.services import mailer

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("/email", response_model=ActionResult)
async def send_email(form: ContactForm):
    """
    Send the contact page form to the shop's inbox.
    """
    return await run_in_threadpool(mailer.send_contact_email, form)


@router.post("/chat", response_model=ActionResult)
async def send_chat_inquiry(inquiry: ChatInquiry):
    """
    Send a chat widget inquiry.
    """
    return await run_in_threadpool(mailer.send_chat_inquiry, inquiry)
