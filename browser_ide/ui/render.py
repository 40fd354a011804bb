"""HTML rendering for the dashboard.

Everything goes through Jinja2 with autoescaping on, so project names and
deployment metadata coming from the API can never inject markup.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from browser_ide.models.deployment import Deployment

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

EMPTY_PLACEHOLDER = "No deployments for this project."
CREATING_MESSAGE = "Creating deployment..."
PENDING_URL = "URL pending..."

STARTER_CODE = """Deno.serve(() => {
  console.log("Responding hello...");
  return new Response("Hello, subhosting!");
});"""

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_message(message: str) -> str:
    """Render a one-line notice for the deployments panel."""
    return templates.env.get_template("_message.html").render(message=message)


def render_deployments(deployments: list[Deployment] | None) -> str:
    """Render the contents of the deployments panel.

    An empty or missing list renders the placeholder notice only.
    """
    if not deployments:
        return render_message(EMPTY_PLACEHOLDER)
    return templates.env.get_template("_deployments.html").render(
        deployments=deployments,
        pending_url=PENDING_URL,
    )
