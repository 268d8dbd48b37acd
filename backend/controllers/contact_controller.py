"""Contact controller handling the contact form."""

import logging
import psycopg2
from flask import request
from models import ContactMessage
from services.errors import RepositoryError
from services.requests_utils import ValidationError, require_email, require_text
from .base_controller import BaseController

logger = logging.getLogger(__name__)


class ContactController(BaseController):
    """Controller for the contact form endpoints."""

    def __init__(self):
        """Initialize contact controller."""
        super().__init__()

    def index(self):
        """Contact form."""
        return self.view(model={'form': {}})

    def submit(self):
        """Save a contact message and redirect to the success page."""
        form = request.form
        try:
            contact = ContactMessage(
                name=require_text(form, 'name', self.localize('contact.name')),
                email=require_email(form),
                message=require_text(form, 'message', self.localize('contact.message'), max_length=4000),
            )
        except ValidationError as e:
            self.notify_error(e.message, persist=False)
            return self.view('Index', model={'form': form.to_dict()}, status=e.status_code)

        try:
            self.repository(ContactMessage).add(contact)
        except (RepositoryError, psycopg2.Error) as e:
            self.notify_error(e)
            return self.redirect_to_action('Index')

        logger.info(f"Saved contact message id={contact.id}")
        self.notify_success(self.localize('contact.saved', contact.name))
        return self.redirect_to_success_page(self.localize('contact.thanks'))

    def preview(self):
        """Render the message preview partial for the submitted form as a text fragment."""
        model = {
            'name': request.form.get('name', ''),
            'message': request.form.get('message', ''),
        }
        return self.render_partial_to_string('_Preview', model)
