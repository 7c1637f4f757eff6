"""
Acme Example - One organization with two projects.

Run from this directory with LANGFUSE_ADMIN_API_KEY set:
    langfuse-provider plan
    langfuse-provider apply
"""

from langfuse_provider.resources import OrganizationResource, ProjectResource

acme = OrganizationResource(name="Acme Corp", resource_name="acme")

chatbot = ProjectResource(name="Support Chatbot", organization=acme)

evals = ProjectResource(name="Offline Evals", organization=acme)
