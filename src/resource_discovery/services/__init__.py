"""Service layer: keyword index, relevance profiles, the resource vault and the discovery entry points.

Modules are imported directly (``from resource_discovery.services.discovery
import ResourceDiscovery``); configuration depends on ``relevance``, so this
package does not import its submodules eagerly.
"""
