"""
Admin Mutation Handler

One handler serves every managed list entity. Image cleanup after an
update or delete is best-effort: the database write is the outcome of the
operation and is never rolled back because a blob could not be removed.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from association_site.admin.entities import NotFoundError, ValidationError
from association_site.extensions import db
from association_site.services.blob import discard_blob

logger = logging.getLogger(__name__)


def _record_id(payload):
    raw = payload.get('id')
    if raw in (None, '') or isinstance(raw, bool):
        raise ValidationError('ID is required')
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError('ID must be an integer')


class EntityHandler:
    """create/update/delete/reorder for one ManagedEntity"""

    ACTIONS = ('create', 'update', 'delete', 'reorder')

    def __init__(self, entity, blob_store):
        self.entity = entity
        self.blob_store = blob_store

    @property
    def model(self):
        return self.entity.model

    def list(self):
        return self.model.query.order_by(*self.entity.sort).all()

    def dispatch(self, action, payload):
        if action not in self.ACTIONS:
            raise ValidationError('Invalid action')
        if action == 'reorder':
            return self.reorder(payload.get('members', payload.get('items')))
        return getattr(self, action)(payload)

    def _get(self, record_id):
        record = db.session.get(self.model, record_id)
        if record is None:
            raise NotFoundError(f'{self.entity.name} #{record_id} not found')
        return record

    def _next_order(self):
        current = db.session.query(func.max(getattr(self.model, self.entity.order_attr))).scalar()
        return 0 if current is None else current + 1

    def create(self, payload):
        values = self.entity.coerce(payload, partial=False)
        order_attr = self.entity.order_attr
        if order_attr and values.get(order_attr) is None:
            values[order_attr] = self._next_order()

        record = self.model(**values)
        db.session.add(record)
        db.session.commit()
        logger.info('Created %s #%s', self.entity.name, record.id)
        return record

    def update(self, payload):
        record = self._get(_record_id(payload))
        old_image = getattr(record, self.entity.image_attr)

        for attr, value in self.entity.coerce(payload, partial=True).items():
            setattr(record, attr, value)
        db.session.commit()
        logger.info('Updated %s #%s', self.entity.name, record.id)

        if old_image and old_image != getattr(record, self.entity.image_attr):
            discard_blob(old_image, self.blob_store)
        return record

    def delete(self, payload):
        record_id = _record_id(payload)
        record = self._get(record_id)
        image = getattr(record, self.entity.image_attr)

        db.session.delete(record)
        db.session.commit()
        logger.info('Deleted %s #%s', self.entity.name, record_id)

        if image:
            discard_blob(image, self.blob_store)

    def reorder(self, items):
        """Apply each {id, order} pair as its own write.

        Entries are not applied atomically: a failing entry is logged and
        skipped, earlier and later entries stay applied.
        """
        if not self.entity.order_attr:
            raise ValidationError('Invalid action')
        if not isinstance(items, list):
            raise ValidationError('Members array is required')

        updates = []
        for item in items:
            if not isinstance(item, dict):
                raise ValidationError('Each entry needs an id and an order')
            order = item.get('order')
            if isinstance(order, bool) or not isinstance(order, int):
                raise ValidationError('Order must be an integer')
            updates.append((_record_id(item), order))

        column = getattr(self.model, self.entity.order_attr)
        failed = []
        for record_id, order in updates:
            try:
                count = self.model.query.filter_by(id=record_id).update({column: order})
                db.session.commit()
            except SQLAlchemyError:
                db.session.rollback()
                logger.warning('Reorder of %s #%s failed', self.entity.name, record_id, exc_info=True)
                failed.append(record_id)
                continue
            if not count:
                failed.append(record_id)

        if failed:
            raise NotFoundError(f'Reorder incomplete for {self.entity.name} ids {failed}')
        logger.info('Reordered %d %s entries', len(updates), self.entity.name)
