#!/usr/bin/env python3
"""
Group Event API Client
Thin wrapper over the remote backend's HTTP API (groups, members, events,
expenses) plus device identity management.
"""

import random
import string
import sys
import time
from typing import Any, Dict, List, Optional

import requests

from groupevent import config
from groupevent.integrations.storage import StorageError


class ApiError(Exception):
    """A failed API request: non-2xx response or transport error."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ApiService:
    """Makes JSON requests against the group event backend."""

    def __init__(self, base_url: str = None, timeout: float = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. "https://host/api" (default: config.API_BASE_URL)
            timeout: Per-request timeout in seconds (default: config.API_TIMEOUT)
            session: requests Session to use (a new one if omitted)
        """
        self.base_url = (base_url or config.API_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else config.API_TIMEOUT
        self.session = session or requests.Session()

    def _request(self, endpoint: str, method: str = 'GET',
                 json_body: Any = None, params: Dict[str, Any] = None) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            ApiError: On a non-2xx status or a transport failure. Never retried.
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(
                method,
                url,
                json=json_body,
                params=params,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            print(f"API request failed: {url} ({e})")
            raise ApiError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            if not isinstance(error_data, dict):
                error_data = {}

            # 404s are expected, e.g. a device that has not joined a group yet
            if response.status_code != 404:
                print(f"HTTP {response.status_code} {response.reason} from {url}: {error_data}")
            else:
                print(f"Resource not found (404): {url}")

            message = (error_data.get('details') or error_data.get('error')
                       or f"HTTP {response.status_code}: {response.reason}")
            raise ApiError(message, status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {url}", status=response.status_code) from e

    # Group endpoints
    def create_group(self, name: str, description: str = None, creator_id: str = None) -> Dict:
        body = {'name': name}
        if description is not None:
            body['description'] = description
        if creator_id is not None:
            body['creatorId'] = creator_id
        return self._request('/groups', method='POST', json_body=body)

    def get_all_groups(self) -> List[Dict]:
        return self._request('/groups')

    def get_group(self, group_id: str) -> Dict:
        return self._request(f"/groups/{group_id}")

    def process_invite(self, code: str) -> Dict:
        return self._request(f"/invites/{code}")

    def join_group_by_code(self, code: str) -> Dict:
        return self._request(f"/invites/{code}", method='POST')

    # Member endpoints
    def join_group(self, group_id: str, name: str, device_id: str, avatar: str = None) -> Dict:
        body = {'name': name, 'deviceId': device_id}
        if avatar is not None:
            body['avatar'] = avatar
        return self._request(f"/groups/{group_id}/members", method='POST', json_body=body)

    def get_member_by_device(self, group_id: str, device_id: str) -> Dict:
        return self._request(f"/groups/{group_id}/members/device/{device_id}")

    def update_member(self, member_id: str, name: str = None, avatar: str = None) -> Dict:
        body = {}
        if name is not None:
            body['name'] = name
        if avatar is not None:
            body['avatar'] = avatar
        return self._request(f"/members/{member_id}", method='PUT', json_body=body)

    # Event endpoints
    def get_group_events(self, group_id: str) -> Dict:
        """Return {'events': [...]} for a group."""
        return self._request(f"/groups/{group_id}/events")

    def get_all_events(self, device_id: str = None) -> Dict:
        """Return {'events': [...]} from the shared catalog."""
        params = {'device_id': device_id} if device_id else None
        return self._request('/events/all', params=params)

    # Expense endpoints
    def get_group_expenses(self, group_id: str, device_id: str) -> Dict:
        return self._request(f"/groups/{group_id}/expenses", params={'device_id': device_id})

    def get_expenses_summary(self, group_id: str, device_id: str) -> Dict:
        return self._request(f"/groups/{group_id}/expenses-summary", params={'device_id': device_id})

    def health_check(self) -> Dict:
        return self._request('/health')


DEVICE_ID_KEY = 'device_id'


class DeviceManager:
    """Provides this installation's device id, persisted in local storage."""

    def __init__(self, storage):
        self.storage = storage
        self._device_id: Optional[str] = None

    def get_device_id(self) -> str:
        if self._device_id:
            return self._device_id

        try:
            device_id = self.storage.get_item(DEVICE_ID_KEY)
            if not device_id:
                device_id = self.generate_device_id()
                self.storage.set_item(DEVICE_ID_KEY, device_id)
        except StorageError as e:
            print(f"Error getting device ID: {e}")
            device_id = self.generate_device_id()

        self._device_id = device_id
        return device_id

    @staticmethod
    def generate_device_id() -> str:
        """Return '<platform>_<epoch ms>_<9 random base36 chars>'."""
        suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=9))
        return f"{sys.platform}_{int(time.time() * 1000)}_{suffix}"


class GroupService:
    """Group flows that combine several API calls."""

    def __init__(self, api: ApiService, devices: DeviceManager):
        self.api = api
        self.devices = devices

    def create_group_with_creator(self, name: str, description: str = None) -> Dict[str, Any]:
        """
        Create a group and join it as its creator.

        Returns:
            Dictionary with 'group', 'joinLink' and 'creatorMember'
        """
        device_id = self.devices.get_device_id()
        created = self.api.create_group(name, description=description, creator_id=device_id)
        group = created['group']

        joined = self.api.join_group(group['id'], name='Group Creator', device_id=device_id, avatar='crown')

        return {
            'group': group,
            'joinLink': created.get('joinLink'),
            'creatorMember': joined['member']
        }

    def join_or_reconnect_to_group(self, group_id: str, user_data: Dict[str, str] = None) -> Dict[str, Any]:
        """
        Reuse an existing membership for this device, or join with user_data.

        Raises:
            ValueError: If the device is not a member and no user_data was given
        """
        device_id = self.devices.get_device_id()

        try:
            member = self.api.get_member_by_device(group_id, device_id)['member']
            returning = True
        except ApiError:
            if not user_data:
                raise ValueError('User data required for new members')
            member = self.api.join_group(
                group_id,
                name=user_data['name'],
                device_id=device_id,
                avatar=user_data.get('avatar')
            )['member']
            returning = False

        return {
            'group': self.api.get_group(group_id),
            'member': member,
            'isReturningUser': returning
        }

    def get_current_member(self, group_id: str) -> Optional[Dict]:
        try:
            return self.api.get_member_by_device(group_id, self.devices.get_device_id())['member']
        except ApiError:
            return None
