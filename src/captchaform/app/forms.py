# forms.py
from wtforms import Form, StringField
from wtforms.validators import DataRequired, Email, Length


class SubmissionForm(Form):
    """Shape validation for a submission, independent of the HTTP layer.

    Built from plain data (``SubmissionForm(data={...})``) so the handler can
    validate a ``SubmissionRequest`` without a request context.
    """
    name = StringField('Name', validators=[DataRequired(), Length(max=255)])
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=255)])
    verification_token = StringField('reCAPTCHA', validators=[DataRequired()])

    def first_errors(self):
        """Return ``{field: message}`` with the first error of each invalid field."""
        return {name: messages[0] for name, messages in self.errors.items() if messages}
