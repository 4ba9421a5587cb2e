"""
HTTP client for the finance API.

Collections are fetched through a `QueryCache` owned by the client. Any
successful create, update or delete drops the cached list for that resource,
so the next read goes back to the server and derived views are recomputed
from the fresh snapshot.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

import requests

import aggregation as agg
from errors import ValidationError, parse
from models import RESOURCES

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code, message):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ApiValidationError(ApiError):
    def __init__(self, message, errors):
        super().__init__(400, message)
        self.errors = errors


class QueryCache:
    """Read-through cache keyed by resource name."""

    def __init__(self):
        self._entries = {}

    def get(self, key, loader):
        if key not in self._entries:
            self._entries[key] = loader()
        return self._entries[key]

    def invalidate(self, key):
        self._entries.pop(key, None)

    def clear(self):
        self._entries.clear()

    def __contains__(self, key):
        return key in self._entries


@dataclass(frozen=True)
class DashboardView:
    totals: agg.MonthlyTotals
    total_savings: Decimal
    account_count: int
    breakdown: list
    series: list
    recent: list


class FinanceClient:
    def __init__(self, base_url, session=None, cache=None, timeout=None):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.cache = cache if cache is not None else QueryCache()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        return self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)

    def _check(self, response):
        if response.ok:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get('message', response.reason)
        if response.status_code == 400:
            raise ApiValidationError(message, body.get('errors', []))
        raise ApiError(response.status_code, message)

    def _validate(self, model, data):
        try:
            return parse(model, data)
        except ValidationError as exc:
            raise ApiValidationError("Invalid data", exc.errors) from exc

    def _resource(self, name):
        try:
            return RESOURCES[name]
        except KeyError:
            raise ValueError(f"Unknown resource: {name}")

    def _fetch(self, name):
        response = self._request('GET', f"/api/{name}")
        self._check(response)
        model = self._resource(name).model
        items = [model.model_validate(item) for item in response.json()]
        logger.debug("Fetched %d %s", len(items), name)
        return items

    def list(self, name):
        self._resource(name)
        return self.cache.get(name, lambda: self._fetch(name))

    def get(self, name, id):
        resource = self._resource(name)
        response = self._request('GET', f"/api/{name}/{id}")
        if response.status_code == 404:
            return None
        self._check(response)
        return resource.model.model_validate(response.json())

    def create(self, name, fields):
        resource = self._resource(name)
        payload = self._validate(resource.create_model, fields).to_json()
        response = self._request('POST', f"/api/{name}", json=payload)
        self._check(response)
        self.cache.invalidate(name)
        return resource.model.model_validate(response.json())

    def update(self, name, id, partial):
        resource = self._resource(name)
        payload = self._validate(resource.update_model, partial).model_dump(
            mode='json', by_alias=True, exclude_unset=True
        )
        response = self._request('PUT', f"/api/{name}/{id}", json=payload)
        if response.status_code == 404:
            return None
        self._check(response)
        self.cache.invalidate(name)
        return resource.model.model_validate(response.json())

    def delete(self, name, id):
        self._resource(name)
        response = self._request('DELETE', f"/api/{name}/{id}")
        if response.status_code == 404:
            return False
        self._check(response)
        self.cache.invalidate(name)
        return True

    def currency(self):
        response = self._request('GET', "/api/settings/currency")
        self._check(response)
        return response.json()['currency']

    def set_currency(self, code):
        response = self._request('PUT', "/api/settings/currency", json={"currency": code})
        self._check(response)
        return response.json()['currency']

    def dashboard(self, now: Optional[date] = None) -> DashboardView:
        transactions = self.list('transactions')
        accounts = self.list('savings')
        return DashboardView(
            totals=agg.monthly_totals(transactions, now),
            total_savings=agg.total_savings(accounts),
            account_count=len(accounts),
            breakdown=agg.category_breakdown(transactions),
            series=agg.monthly_series(transactions),
            recent=agg.recent_transactions(transactions),
        )
