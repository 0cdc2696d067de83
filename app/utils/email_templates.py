"""HTML email templates for application status notifications."""

from html import escape

_LAYOUT = """<html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
      <div style="background: {accent}; color: white; padding: 24px; text-align: center; border-radius: 8px 8px 0 0;">
        <h1 style="margin: 0; font-size: 24px;">{heading}</h1>
      </div>
      <div style="background: #f8f9fa; padding: 24px; border-radius: 0 0 8px 8px;">
        <p style="font-size: 16px;">Dear {candidate},</p>
        {body}
        <div style="text-align: center; margin: 28px 0;">
          <a href="{link}" style="background: {accent}; color: white; padding: 10px 26px; text-decoration: none; border-radius: 20px; font-weight: bold;">{link_label}</a>
        </div>
        <hr style="border: none; border-top: 1px solid #dee2e6; margin: 24px 0;">
        <p style="font-size: 12px; color: #6c757d; text-align: center; margin: 0;">
          This email was sent by {employer} from {company}.
        </p>
      </div>
    </div>
  </body>
</html>"""


def _render(*, heading, accent, body, link, link_label, candidate, employer, company) -> str:
    return _LAYOUT.format(
        heading=heading,
        accent=accent,
        body=body,
        link=escape(link, quote=True),
        link_label=link_label,
        candidate=escape(candidate),
        employer=escape(employer),
        company=escape(company),
    )


def application_accepted_email(candidate_name, job_title, company_name, employer_name, base_url) -> str:
    body = (
        f"<p>We are pleased to inform you that your application for <strong>{escape(job_title)}</strong> "
        f"at <strong>{escape(company_name)}</strong> has been <strong>ACCEPTED</strong>.</p>"
        f"<p>{escape(employer_name)} will contact you shortly with the next steps.</p>"
    )
    return _render(
        heading="Application Accepted",
        accent="#28a745",
        body=body,
        link=f"{base_url}/applications",
        link_label="View Your Applications",
        candidate=candidate_name,
        employer=employer_name,
        company=company_name,
    )


def application_rejected_email(candidate_name, job_title, company_name, employer_name, base_url) -> str:
    body = (
        f"<p>Thank you for your interest in the <strong>{escape(job_title)}</strong> position at "
        f"<strong>{escape(company_name)}</strong>.</p>"
        "<p>Unfortunately, we are unable to move forward with your application at this time. "
        "We encourage you to apply for future openings that match your skills.</p>"
    )
    return _render(
        heading="Application Update",
        accent="#6c757d",
        body=body,
        link=f"{base_url}/jobs",
        link_label="Browse More Jobs",
        candidate=candidate_name,
        employer=employer_name,
        company=company_name,
    )


def application_shortlisted_email(candidate_name, job_title, company_name, employer_name, base_url) -> str:
    body = (
        f"<p>Good news: your application for <strong>{escape(job_title)}</strong> at "
        f"<strong>{escape(company_name)}</strong> has been <strong>SHORTLISTED</strong>.</p>"
        f"<p>{escape(employer_name)} will be in touch about the next stage of the process.</p>"
    )
    return _render(
        heading="Application Shortlisted",
        accent="#17a2b8",
        body=body,
        link=f"{base_url}/applications",
        link_label="View Your Applications",
        candidate=candidate_name,
        employer=employer_name,
        company=company_name,
    )
