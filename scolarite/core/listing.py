"""
Collection loading for the list screens.

Every list view loads the whole collection for the caller's scope, narrows it
with the query-string filters and hands the template an immutable tuple. A
database failure never breaks the page: it is logged, a banner is shown and the
collection is empty.
"""
import logging
from dataclasses import dataclass
from functools import reduce
from operator import or_

from django.contrib import messages
from django.db import DatabaseError
from django.db.models import CharField, Q
from django.db.models.functions import Cast

logger = logging.getLogger(__name__)

ALL = "all"


@dataclass(frozen=True)
class ListFilter:
    q: str = ""
    status: str = ALL
    kind: str = ALL

    @classmethod
    def from_request(cls, request):
        return cls(
            q=(request.GET.get("q") or "").strip(),
            status=(request.GET.get("status") or ALL).strip() or ALL,
            kind=(request.GET.get("kind") or ALL).strip() or ALL,
        )

    def apply(self, qs, search=(), code_field=None, status_field=None, kind_field=None):
        """
        search: text fields matched with icontains.
        code_field: numeric field also matched as text ("12" finds 1234).
        status_field, kind_field: fields compared with the status and kind
        filters, when the collection has them; otherwise those filters are ignored.
        """
        if self.q:
            terms = [Q(**{f"{f}__icontains": self.q}) for f in search]
            if code_field:
                qs = qs.annotate(code_text=Cast(code_field, CharField()))
                terms.append(Q(code_text__icontains=self.q))
            if terms:
                qs = qs.filter(reduce(or_, terms))
        if status_field and self.status != ALL:
            qs = qs.filter(**{status_field: self.status})
        if kind_field and self.kind != ALL:
            qs = qs.filter(**{kind_field: self.kind})
        return qs

    def as_context(self):
        return {"q": self.q, "status": self.status, "kind": self.kind}


def load_collection(request, qs, flt: ListFilter, error_message: str, **apply_kwargs) -> tuple:
    try:
        return tuple(flt.apply(qs, **apply_kwargs))
    except DatabaseError:
        logger.exception("Collection load failed for %s", qs.model.__name__)
        messages.error(request, error_message)
        return ()
