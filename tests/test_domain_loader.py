from __future__ import annotations

import unittest
from unittest import mock

from acli.domain import DomainLoader
from acli.domain.loader import domain_name_from_url
from acli.domain.models import ProductType, Project
from acli.errors import ApiError


class DomainLoaderTests(unittest.TestCase):
    def test_confluence_first_then_unavailable_placeholders(self) -> None:
        client = mock.Mock()
        client.list_projects.return_value = [Project("1", "ENG", "Engineering")]

        domain = DomainLoader(client, "https://example.atlassian.net").load_domain()

        self.assertEqual(domain.name, "example.atlassian.net")
        self.assertEqual(
            [(p.product_type, p.available) for p in domain.products],
            [(ProductType.CONFLUENCE, True), (ProductType.JIRA, False), (ProductType.JSM, False)],
        )
        self.assertEqual(domain.products[0].projects[0].key, "ENG")
        client.list_projects.assert_called_once_with()

    def test_failed_discovery_is_isolated(self) -> None:
        client = mock.Mock()
        client.list_projects.side_effect = ApiError(401, "unauthorized")

        domain = DomainLoader(client, "https://example.atlassian.net").load_domain()

        confluence = domain.products[0]
        self.assertFalse(confluence.available)
        self.assertEqual(confluence.projects, ())
        self.assertEqual(confluence.name, "Confluence (Error: API error 401: unauthorized)")
        self.assertEqual(len(domain.products), 3)

    def test_domain_name_from_url(self) -> None:
        self.assertEqual(domain_name_from_url("https://acme.atlassian.net/wiki"), "acme.atlassian.net")
        self.assertEqual(domain_name_from_url("not a url"), "not a url")


if __name__ == "__main__":
    unittest.main()
