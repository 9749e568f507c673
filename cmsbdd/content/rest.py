######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################

"""
JSON REST adapter for the content repository.

Endpoints (relative to CONTENT_API_URL):

    POST   content/types                         create a content type draft
    POST   content/types/<identifier>/publish    publish it
    GET    content/types/<identifier>            load it with its fields
    POST   content/objects                       create a content draft
    POST   content/objects/<id>/versions/<v>/publish
    PATCH  content/objects/<id>                  update fields
    DELETE content/objects/<id>
    GET    content/objects?remote_id=<id>        stored data for an identifier
    GET    content/locations?url_alias=<path>    content behind a url alias
    POST   users
"""
import logging
from urllib.parse import urljoin

import requests

from cmsbdd.content.repository import ContentRepository
from cmsbdd.content.structs import serialize

logger = logging.getLogger("cmsbdd")

REQUEST_TIMEOUT = 10


class RestContentRepository(ContentRepository):
    """ContentRepository talking JSON over HTTP"""

    def __init__(self, api_url: str, session: requests.Session | None = None, timeout=REQUEST_TIMEOUT):
        self.api_url = api_url.rstrip("/") + "/"
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        """Build a URL rooted at the content API"""
        return urljoin(self.api_url, path.lstrip("/"))

    def _request(self, method: str, path: str, **kwargs):
        logger.debug("%s %s", method, path)
        response = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json() if response.content else None

    def _find(self, path: str, params: dict):
        """GET that answers None on 404"""
        response = self.session.get(self._url(path), params=params, timeout=self.timeout)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        data = response.json()
        if isinstance(data, list):
            return data[0] if data else None
        return data

    def create_content_type(self, draft):
        logger.info("Creating Content Type '%s'", draft.identifier)
        return self._request("POST", "content/types", json=serialize(draft))

    def publish_content_type(self, identifier: str):
        return self._request("POST", f"content/types/{identifier}/publish")

    def load_content_type_by_identifier(self, identifier: str) -> dict:
        response = self.session.get(self._url(f"content/types/{identifier}"), timeout=self.timeout)
        if response.status_code == 404:
            return {}
        response.raise_for_status()
        return response.json()

    def create_content(self, draft) -> dict:
        logger.info("Creating Content of type '%s'", draft.content_type)
        return self._request("POST", "content/objects", json=serialize(draft))

    def publish_version(self, content_id, version):
        return self._request("POST", f"content/objects/{content_id}/versions/{version}/publish")

    def update_content(self, content_id, fields: dict):
        return self._request("PATCH", f"content/objects/{content_id}", json={"fields": fields})

    def delete_content(self, content_id) -> None:
        """Remove a content object; ignore 404s"""
        response = self.session.delete(
            self._url(f"content/objects/{content_id}"), timeout=self.timeout
        )
        if response.status_code != 404:
            response.raise_for_status()

    def load_content_by_url(self, path: str):
        return self._find("content/locations", {"url_alias": path})

    def get_data_by_identifier(self, identifier: str):
        return self._find("content/objects", {"remote_id": identifier})

    def create_user(self, data: dict):
        logger.info("Creating User '%s'", data.get("login", ""))
        return self._request("POST", "users", json=data)
