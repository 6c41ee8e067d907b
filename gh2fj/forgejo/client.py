import logging
import requests

from ..errors import NotFound, TransientError

logger = logging.getLogger('gh2fj')


def api_base_url(forgejo_url):
    """Return the REST API root for a Forgejo instance URL"""
    return f"{forgejo_url.rstrip('/')}/api/v1"


def _error_message(response):
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get('message'):
        return data['message']
    return response.text or response.reason or 'no response body'


class ForgejoAPI:
    """Thin wrapper around a requests session bound to one Forgejo instance"""

    def __init__(self, forgejo_url, forgejo_token, session=None):
        self.base_url = api_base_url(forgejo_url)
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'token {forgejo_token}',
            'Content-Type': 'application/json',
        })

    def request(self, method, path, **kwargs):
        """Issue a request against the API and map failures to gh2fj errors.

        Returns:
            requests.Response: the response for any 2xx status

        Raises:
            NotFound: the server answered 404
            TransientError: any other status or a transport failure
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransientError(f"{method} {path} failed: {e}") from e

        if response.status_code == 404:
            raise NotFound(f"{path} not found")
        if not 200 <= response.status_code < 300:
            message = _error_message(response)
            logger.debug(f"{method} {path} returned {response.status_code}: {message}")
            raise TransientError(f"{response.status_code} {message}", status_code=response.status_code)
        return response

    def get(self, path, **kwargs):
        return self.request('GET', path, **kwargs)

    def post(self, path, **kwargs):
        return self.request('POST', path, **kwargs)

    def patch(self, path, **kwargs):
        return self.request('PATCH', path, **kwargs)
