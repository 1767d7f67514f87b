# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Interactive console for the ATS CV Generator.
"""

import argparse
import sys
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from ats_cv.app import CVStudio
from ats_cv.config import AppConfig
from ats_cv.editing import (
    AddEducation,
    AddWorkExperience,
    PersonalField,
    RemoveEntry,
    Section,
    SetPersonalInfo,
    SetSkills,
    SetSummary,
    parse_responsibilities,
    parse_skills,
)
from ats_cv.errors import ATSCVError
from ats_cv.models import Education, WorkExperience
from ats_cv.navigation import Screen

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(log_dir: Path, verbosity: int, quiet: bool = False):
    """
    Configures logging:
    - File: <log_dir>/ats_cv.log (DEBUG)
    - Console: -q=ERROR, default=WARNING, -v=INFO, -vv=DEBUG
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "ats_cv.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    if quiet:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console_handler = RichHandler(console=console, show_path=False, markup=False)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(console_handler)

    # Silence some noisy libs if not in debug
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def read_block(label: str) -> str:
    """Reads multi-line input until a line containing only '.'."""
    console.print(f"[bold]{label}[/bold] [dim](finish with a line containing only '.')[/dim]")
    lines = []
    while True:
        line = console.input()
        if line.strip() == ".":
            break
        lines.append(line)
    return "\n".join(lines).strip()


def _auth_screen(studio: CVStudio) -> bool:
    choice = Prompt.ask("[l]ogin, [s]ign up or [q]uit", choices=["l", "s", "q"], default="l")
    if choice == "q":
        return False
    email = Prompt.ask("Email").strip()
    password = Prompt.ask("Password", password=True)
    if not email or not password:
        console.print("[red]Please enter both email and password.[/red]")
    elif choice == "s":
        if not studio.sign_up(email, password):
            console.print("[red]An account with this email already exists.[/red]")
    elif not studio.login(email, password):
        console.print("[red]Invalid email or password.[/red]")
    return True


def _home_screen(studio: CVStudio) -> bool:
    console.rule(studio.greeting())
    if not studio.current_profile().is_configured:
        console.print("[yellow]Profile not set up. Configure it in settings to get tailored CVs.[/yellow]")
    choice = Prompt.ask(
        "[g]enerate CV, [c]Vs, [s]ettings, [o]ut (logout) or [q]uit",
        choices=["g", "c", "s", "o", "q"], default="g",
    )
    if choice == "q":
        return False
    if choice == "o":
        studio.logout()
    else:
        studio.nav.navigate({"g": Screen.JOB_INPUT, "c": Screen.CV_LIST, "s": Screen.SETTINGS}[choice])
    return True


def _show_profile(studio: CVStudio):
    profile = studio.current_profile()
    info = profile.personal_info
    plan = "Pro" if studio.session.is_pro else "Free"
    console.print(f"Account: [bold]{studio.session.user}[/bold]  Plan: [bold]{plan}[/bold]")
    console.print(f"Name: {info.name}  Email: {info.email}  Phone: {info.phone}")
    console.print(f"LinkedIn: {info.linkedin}  GitHub: {info.github}  Portfolio: {info.portfolio}")
    console.print(f"Summary: {profile.summary}")
    for i, job in enumerate(profile.work_experience, 1):
        console.print(f"  W{i}. {job.job_title} @ {job.company} ({job.start_date} - {job.end_date})")
    for i, edu in enumerate(profile.education, 1):
        console.print(f"  E{i}. {edu.degree}, {edu.institution} ({edu.graduation_date})")
    console.print(f"Skills: {', '.join(profile.skills)}")


def _settings_screen(studio: CVStudio) -> bool:
    _show_profile(studio)
    choice = Prompt.ask(
        "[a]nalyze pasted CV, analyze [f]ile, edit [p]ersonal info, [s]ummary, s[k]ills, "
        "add [w]ork, add [e]ducation, [r]emove entry, [u]pgrade, [b]ack",
        choices=["a", "f", "p", "s", "k", "w", "e", "r", "u", "b"], default="b",
    )
    if choice == "b":
        studio.nav.navigate(Screen.HOME)
    elif choice == "u":
        studio.nav.navigate(Screen.PAYMENT)
    elif choice in ("a", "f"):
        with console.status("Analyzing..."):
            if choice == "a":
                profile = studio.analyze_cv(read_block("Paste your CV"))
            else:
                profile = studio.analyze_cv_file(Prompt.ask("Path to CV file"))
        if profile is not None and Confirm.ask("Replace your profile with the extracted one?"):
            studio.save_profile(profile)
    elif choice == "p":
        field = PersonalField(Prompt.ask("Field", choices=[f.value for f in PersonalField]))
        studio.edit_profile(SetPersonalInfo(field, Prompt.ask("Value", default="")))
    elif choice == "s":
        studio.edit_profile(SetSummary(read_block("Professional summary")))
    elif choice == "k":
        studio.edit_profile(SetSkills(parse_skills(Prompt.ask("Skills (comma separated)"))))
    elif choice == "w":
        _add_work_experience(studio)
    elif choice == "e":
        _add_education(studio)
    elif choice == "r":
        _remove_entry(studio)
    return True


def _add_work_experience(studio: CVStudio):
    # Every field is asked for before anything is saved
    entry = WorkExperience(
        job_title=Prompt.ask("Job title"),
        company=Prompt.ask("Company"),
        location=Prompt.ask("Location", default=""),
        start_date=Prompt.ask("Start date"),
        end_date=Prompt.ask("End date", default="Present"),
        responsibilities=parse_responsibilities(read_block("Responsibilities (one per line)")),
    )
    studio.edit_profile(AddWorkExperience(entry))


def _add_education(studio: CVStudio):
    entry = Education(
        degree=Prompt.ask("Degree"),
        institution=Prompt.ask("Institution"),
        location=Prompt.ask("Location", default=""),
        graduation_date=Prompt.ask("Graduation date"),
    )
    studio.edit_profile(AddEducation(entry))


def _remove_entry(studio: CVStudio):
    profile = studio.current_profile()
    label = Prompt.ask("Entry to remove (e.g. W1 or E2)").strip().upper()
    sections = {"W": (Section.WORK_EXPERIENCE, profile.work_experience),
                "E": (Section.EDUCATION, profile.education)}
    if label[:1] not in sections or not label[1:].isdigit():
        console.print("[red]Unknown entry.[/red]")
        return
    section, entries = sections[label[0]]
    index = int(label[1:]) - 1
    if not 0 <= index < len(entries):
        console.print("[red]Unknown entry.[/red]")
        return
    studio.edit_profile(RemoveEntry(section, entries[index].id))


def _job_input_screen(studio: CVStudio) -> bool:
    job_description = read_block("Paste the job description")
    if not job_description:
        studio.nav.navigate(Screen.HOME)
        return True
    with console.status("Generating your tailored CV..."):
        studio.generate_cv(job_description)
    return True


def _preview_screen(studio: CVStudio) -> bool:
    document = studio.nav.selected
    console.rule(f"CV {document.id}  |  ATS score {document.ats_score}/100")
    console.print(Markdown(document.markdown))
    choice = Prompt.ask(
        "[r]evise, save [m]arkdown, save [d]ocx (Pro), [b]ack",
        choices=["r", "m", "d", "b"], default="b",
    )
    if choice == "r":
        change_request = read_block("Describe the changes")
        if change_request:
            with console.status("Regenerating..."):
                studio.revise_cv(change_request)
    elif choice == "m":
        console.print(f"Saved to {studio.export_markdown()}")
    elif choice == "d":
        console.print(f"Saved to {studio.export_docx()}")
    else:
        studio.nav.navigate(Screen.HOME)
    return True


def _list_screen(studio: CVStudio) -> bool:
    documents = studio.session.documents
    if not documents:
        console.print("No CVs generated yet.")
        studio.nav.navigate(Screen.HOME)
        return True
    table = Table(title="Your CVs")
    table.add_column("#")
    table.add_column("Generated")
    table.add_column("ATS")
    table.add_column("Job description")
    for i, doc in enumerate(documents, 1):
        table.add_row(str(i), doc.generated_date[:19], str(doc.ats_score), doc.job_description[:60])
    console.print(table)
    choice = Prompt.ask("Open # or [b]ack", default="b")
    if choice.isdigit() and 1 <= int(choice) <= len(documents):
        studio.open_cv(documents[int(choice) - 1].id)
    else:
        studio.nav.navigate(Screen.HOME)
    return True


def _payment_screen(studio: CVStudio) -> bool:
    if studio.session.is_pro:
        console.print("Pro features are already unlocked.")
        studio.nav.navigate(Screen.HOME)
    elif Confirm.ask("Upgrade to Pro (unlocks DOCX export)?"):
        studio.complete_checkout()
        console.print("[green]Pro features unlocked.[/green]")
    else:
        studio.nav.navigate(Screen.HOME)
    return True


SCREENS = {
    Screen.AUTH: _auth_screen,
    Screen.HOME: _home_screen,
    Screen.SETTINGS: _settings_screen,
    Screen.JOB_INPUT: _job_input_screen,
    Screen.CV_PREVIEW: _preview_screen,
    Screen.CV_LIST: _list_screen,
    Screen.PAYMENT: _payment_screen,
}


def run(studio: CVStudio):
    """Screen loop. Each handler returns False to quit."""
    while True:
        try:
            if not SCREENS[studio.screen](studio):
                break
        except (ATSCVError, ValueError, KeyError) as e:
            console.print(f"[red]{escape(str(e))}[/red]")


def main():
    try:
        _main_cli()
    except KeyboardInterrupt:
        # Use stderr so it captures attention even if stdout is redirected
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)


def _main_cli():
    parser = argparse.ArgumentParser(description="ATS CV Generator Pro")
    parser.add_argument("--home", help="Data directory for the store, logs and exports (default: user_content)")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification (proxy environments)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status output (ERROR only)")
    args = parser.parse_args()

    config = AppConfig.from_env(home=args.home, ca_bundle=args.ca_bundle)
    setup_logging(config.log_dir, args.verbose, quiet=args.quiet)

    console.rule("[bold]ATS CV Generator Pro[/bold]")
    run(CVStudio.from_config(config))


if __name__ == "__main__":
    main()
