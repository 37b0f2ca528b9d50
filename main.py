"""
Agent OS - Natural Language CLI

Tell it what you want in plain English; it plans a workflow across the
available agents and runs it.

Usage:
    python main.py run "plan a trip to Paris"      # Plan and execute
    python main.py plan "find sushi near me"       # Show the plan only
    python main.py schema                          # Plan JSON schema
    python main.py aix task.aix                    # Run a standalone AIX task
    python main.py agents                          # List agent capabilities
    python main.py info                            # Show configuration
"""

import json
import sys
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from agent_os import __version__
from agent_os.aix import AixExecutor, parse_file
from agent_os.config import Config
from agent_os.core.plan import plan_json_schema
from agent_os.core.planner import Planner
from agent_os.orchestrator import Orchestrator, load_registry
from agent_os.utils.logger import setup_logger

app = typer.Typer(add_completion=False, help="Plan and run multi-agent workflows from plain English.")
console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """Agent OS command line."""
    setup_logger(level=log_level)


def print_json(data: Any, title: str, border_style: str = "blue"):
    """Pretty print a JSON-compatible value in a panel."""
    text = json.dumps(data, indent=2, default=str)
    console.print(Panel(Syntax(text, "json", theme="monokai"), title=title, border_style=border_style))


def print_result(response: Dict[str, Any]):
    """Render an orchestrator response."""
    result = response["result"]
    print_json(response["plan"], "Plan", "cyan")

    for step in result["steps"]:
        status = "[green]success[/green]" if step["status"] == "success" else "[red]error[/red]"
        console.print(f"  {step['stepId']}: {step['agentId']}.{step['taskType']} - {status}")

    if result["status"] == "completed":
        print_json(result["outputs"], "Outputs", "green")
    else:
        error = result["error"]
        console.print(Panel(
            f"Step [bold]{error['stepId']}[/bold] ({error['agentName']}.{error['taskType']}) failed:\n"
            f"{error['errorMessage']}",
            title="Workflow failed",
            border_style="red",
        ))
        if response.get("diagnosis"):
            print_json(response["diagnosis"], "Diagnosis", "yellow")


@app.command()
def run(
    request: str = typer.Argument(..., help="What you want done, in plain English"),
    diagnose: bool = typer.Option(False, "--diagnose", "-d", help="Diagnose a failed step"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Plan a request and execute the workflow."""
    orchestrator = Orchestrator()
    response = orchestrator.handle(request, diagnose=diagnose)

    if as_json:
        console.print_json(json.dumps(response, default=str))
    else:
        print_result(response)

    if response["result"]["status"] != "completed":
        raise typer.Exit(code=1)


@app.command()
def plan(
    request: str = typer.Argument(..., help="What you want done, in plain English"),
    fallback_only: bool = typer.Option(False, "--fallback-only", help="Use the rule-based planner only"),
):
    """Show the workflow plan for a request without running it."""
    planner = Planner(registry=load_registry())
    workflow = planner.fallback_plan(request) if fallback_only else planner.plan(request)
    console.print_json(workflow.to_json())


@app.command()
def schema():
    """Print the JSON schema of a workflow plan."""
    console.print_json(json.dumps(plan_json_schema()))


@app.command()
def aix(path: str = typer.Argument(..., help="Path to an .aix file")):
    """Execute a standalone AIX task."""
    try:
        document = parse_file(path)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] cannot read {path}: {e}")
        raise typer.Exit(code=1)

    result = AixExecutor().execute(document)
    if result.success:
        console.print(Panel(result.output or "", title="Output", border_style="green"))
    else:
        console.print(f"[bold red]{result.error_code}:[/bold red] {result.error}")
        raise typer.Exit(code=1)


@app.command()
def agents():
    """List agents and the tasks they accept."""
    registry = load_registry()

    table = Table(title="Agent Capabilities")
    table.add_column("Agent", style="cyan")
    table.add_column("Task")
    table.add_column("Required fields")

    for entry in registry.list_capabilities():
        for i, task in enumerate(entry.tasks):
            table.add_row(
                f"{entry.agent_id} ({entry.name})" if i == 0 else "",
                task.name,
                ", ".join(task.required_fields),
            )

    console.print(table)


@app.command()
def info():
    """Show system information."""
    console.print(f"\n[bold cyan]Agent OS v{__version__}[/bold cyan]\n")
    console.print(f"LLM Provider: {Config.DEFAULT_LLM_PROVIDER}")
    console.print(f"Model: {Config.DEFAULT_MODEL or 'provider default'}")
    console.print(f"OpenAI Key: {'Set' if Config.OPENAI_API_KEY else 'Not set'}")
    console.print(f"Anthropic Key: {'Set' if Config.ANTHROPIC_API_KEY else 'Not set'}")
    console.print(f"Capabilities: {Config.CAPABILITIES_FILE or 'built-in catalog'}")

    if not Config.is_configured():
        console.print("\n[yellow]No credentials for the default provider: "
                      "planning uses the rule-based planner.[/yellow]")

    registry = load_registry()
    console.print(f"\nAgents: {len(registry)}")
    console.print(f"Tasks: {sum(len(e.tasks) for e in registry.list_capabilities())}")
    console.print()


if __name__ == "__main__":
    if len(sys.argv) == 1:
        app(["--help"])
    else:
        app()
