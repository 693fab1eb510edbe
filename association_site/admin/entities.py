"""
Managed List Entities

Each admin-managed list (board members, upcoming events, past events) is
described by a schema: which payload keys map to which model attributes,
how values are coerced, which fields are required, which attribute holds
the entity's image, and whether the list carries a display order.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from association_site.models import BoardMember, Event, PastEvent
from association_site.services.dates import parse_date_only


class AdminError(Exception):
    """Base class for admin mutation errors."""


class ValidationError(AdminError):
    """Missing or malformed input; reported to the client as 400."""


class NotFoundError(AdminError):
    """The referenced record does not exist."""


def _text(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flag(value):
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _date(value):
    try:
        return parse_date_only(value)
    except (TypeError, ValueError):
        raise ValidationError('Invalid date, expected YYYY-MM-DD')


def _integer(value):
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValidationError('Order must be an integer')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError('Order must be an integer')


@dataclass(frozen=True)
class Field:
    key: str
    attr: str
    coerce: Callable = _text
    required: bool = False
    nullable: bool = True


@dataclass(frozen=True)
class ManagedEntity:
    name: str
    model: type
    fields: Tuple[Field, ...]
    image_attr: str = 'image'
    order_attr: Optional[str] = None
    sort: Tuple = field(default_factory=tuple)

    @property
    def required_keys(self):
        return [f.key for f in self.fields if f.required]

    def coerce(self, payload, partial):
        """Map payload keys to model attributes.

        With `partial`, keys absent from the payload are left out so the
        stored values survive; required fields may not be blanked.
        """
        if not partial:
            missing = [k for k in self.required_keys if payload.get(k) in (None, '')]
            if missing:
                raise ValidationError(self._missing_message(self.required_keys))

        values = {}
        for f in self.fields:
            if f.key not in payload:
                if not partial and f.coerce is _flag:
                    values[f.attr] = False
                continue
            value = f.coerce(payload[f.key])
            if f.required and value is None:
                raise ValidationError(self._missing_message([f.key]))
            if value is None and not f.nullable:
                continue
            values[f.attr] = value
        return values

    def _missing_message(self, keys):
        joined = ' and '.join(keys)
        verb = 'is' if len(keys) == 1 else 'are'
        return f'{joined[0].upper()}{joined[1:]} {verb} required'


BOARD_MEMBERS = ManagedEntity(
    name='board',
    model=BoardMember,
    fields=(
        Field('name', 'name', required=True),
        Field('role', 'role', required=True),
        Field('roles', 'roles'),
        Field('image', 'image'),
        Field('order', 'order', coerce=_integer, nullable=False),
    ),
    order_attr='order',
    sort=(BoardMember.order.asc(), BoardMember.id.asc()),
)

UPCOMING_EVENTS = ManagedEntity(
    name='upcoming',
    model=Event,
    fields=(
        Field('title', 'title', required=True),
        Field('date', 'date', coerce=_date, required=True),
        Field('time', 'time'),
        Field('dateTBA', 'date_tba', coerce=_flag),
        Field('venue', 'venue'),
        Field('location', 'location'),
        Field('description', 'description'),
        Field('image', 'image'),
        Field('gallery', 'gallery'),
        Field('buttonText', 'button_text'),
        Field('buttonUrl', 'button_url'),
        Field('hidden', 'hidden', coerce=_flag),
    ),
    sort=(Event.date.asc(),),
)

PAST_EVENTS = ManagedEntity(
    name='past',
    model=PastEvent,
    fields=(
        Field('title', 'title', required=True),
        Field('date', 'date', coerce=_date, required=True),
        Field('venue', 'venue'),
        Field('location', 'location'),
        Field('description', 'description'),
        Field('image', 'image'),
        Field('gallery', 'gallery'),
        Field('hidden', 'hidden', coerce=_flag),
    ),
    sort=(PastEvent.date.desc(),),
)

EVENT_TYPES = {
    'upcoming': UPCOMING_EVENTS,
    'past': PAST_EVENTS,
}
