"""
MJML Email Templates
All email templates using MJML for responsive, cross-client compatibility.
Every value interpolated here must already be HTML-escaped by the caller.
"""

from datetime import datetime
from typing import Optional

from .config import CLINIC_NAME

# Clinic theme colors - Pink/Indigo color scheme
THEME = {
    "primary": "#db2777",
    "primary_light": "#fdf2f8",
    "primary_border": "#fbcfe8",
    "admin": "#4338ca",
    "admin_light": "#f1f5f9",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#333333",
    "text_muted": "#6b7280",
    "border": "#e2e8f0",
    "warning_bg": "#fefce8",
    "warning_text": "#854d0e",
    "success_bg": "#f0fdf4",
    "success_text": "#15803d",
    "google": "#4285F4",
    "outlook": "#0072C6",
}


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    accent: str = THEME["primary"],
    header_bg: str = THEME["primary_light"],
    show_footer: bool = True,
) -> str:
    """Base MJML template wrapper for all emails"""

    footer_section = ""
    if show_footer:
        footer_section = f"""
        <mj-section padding="15px 20px" background-color="#f3f4f6">
          <mj-column>
            <mj-text align="center" font-size="12px" color="{THEME['text_muted']}" padding="0">
              {CLINIC_NAME} &copy; {datetime.now().year}
            </mj-text>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="#ffffff" width="600px">
        <!-- Header -->
        <mj-section background-color="{header_bg}" padding="20px">
          <mj-column>
            <mj-text align="center" font-size="26px" font-weight="700" color="{accent}" padding="0">
              {title}
            </mj-text>
          </mj-column>
        </mj-section>

        <!-- Main Content -->
        <mj-section background-color="#ffffff" padding="20px 30px">
          <mj-column>
            {content_sections}
          </mj-column>
        </mj-section>

        {footer_section}
      </mj-body>
    </mjml>
    """


def _zones_list(zones: list[str]) -> str:
    items = "".join(f"<li>{zone}</li>" for zone in zones)
    return f'<ul style="padding-left: 20px; margin: 0;">{items}</ul>'


def _calendar_buttons(links: dict[str, str], google_label: str, outlook_label: str) -> str:
    return f"""
    <mj-button href="{links['google']}" background-color="{THEME['google']}" color="#ffffff" border-radius="5px" padding="5px">
      {google_label}
    </mj-button>
    <mj-button href="{links['outlook']}" background-color="{THEME['outlook']}" color="#ffffff" border-radius="5px" padding="5px">
      {outlook_label}
    </mj-button>
    """


def appointment_confirmation_template(
    name: str,
    display_date: str,
    time: str,
    zones: list[str],
    calendar_links: dict[str, str],
) -> str:
    """Booking request receipt for the client"""
    content = f"""
    <mj-text>
      Hemos recibido tu solicitud de turno. ¡Gracias por elegir nuestro centro de belleza!
    </mj-text>

    <mj-text>
      A continuación, te dejamos los detalles. <strong>Nos pondremos en contacto con vos por WhatsApp
      a la brevedad para confirmar definitivamente el turno.</strong>
    </mj-text>

    <mj-text font-size="20px" font-weight="600" color="{THEME['primary']}" padding="20px 0 10px 0">
      Detalles de tu Solicitud
    </mj-text>

    <mj-text padding="0">
      <strong>Fecha:</strong> {display_date}<br/>
      <strong>Hora:</strong> {time} hs<br/>
      <strong>Zonas a tratar:</strong>
      {_zones_list(zones)}
    </mj-text>

    <mj-text align="center" font-size="18px" font-weight="600" color="{THEME['primary']}" padding="25px 0 10px 0">
      Agregá el turno a tu calendario
    </mj-text>

    {_calendar_buttons(calendar_links, "Google Calendar", "Outlook Calendar")}

    <mj-text align="center" font-size="12px" color="{THEME['text_muted']}" padding="10px 0">
      Para Apple Calendar y otros, usá el archivo .ics adjunto a este email.
    </mj-text>

    <mj-text font-size="14px" color="#555555">
      Recordá que esta es una solicitud y está sujeta a nuestra confirmación final.
    </mj-text>

    <mj-text>
      ¡Te esperamos!<br/><strong style="color: {THEME['primary']};">El equipo de {CLINIC_NAME}</strong>
    </mj-text>
    """

    return get_base_template(
        title=f"¡Hola, {name}!",
        preview_text="Confirmación de Solicitud de Turno",
        content_sections=content,
    )


def appointment_admin_notification_template(
    name: str,
    email: str,
    display_date: str,
    time: str,
    zones: list[str],
    calendar_links: dict[str, str],
    phone: Optional[str] = None,
    message: Optional[str] = None,
) -> str:
    """New web booking notification for the clinic staff"""
    phone_html = f"<strong>Teléfono/WhatsApp:</strong> {phone}<br/>" if phone else ""
    message_section = ""
    if message:
        message_section = f"""
        <mj-text padding="15px 0 0 0"><strong>Mensaje adicional del cliente:</strong></mj-text>
        <mj-text container-background-color="{THEME['background']}" padding="10px">
          {message}
        </mj-text>
        """

    content = f"""
    <mj-text>
      Se ha recibido una nueva solicitud de turno. <strong>Es necesario contactar al cliente para confirmar.</strong>
    </mj-text>

    <mj-divider border-color="{THEME['border']}" border-width="2px" padding="10px 0" />

    <mj-text font-size="20px" font-weight="600" color="{THEME['admin']}" padding="0 0 10px 0">
      Datos del Cliente
    </mj-text>
    <mj-text padding="0">
      <strong>Nombre:</strong> {name}<br/>
      <strong>Email:</strong> <a href="mailto:{email}" style="color: {THEME['admin']};">{email}</a><br/>
      {phone_html}
    </mj-text>

    <mj-divider border-color="{THEME['border']}" border-width="2px" padding="10px 0" />

    <mj-text font-size="20px" font-weight="600" color="{THEME['admin']}" padding="0 0 10px 0">
      Detalles del Turno Solicitado
    </mj-text>
    <mj-text padding="0">
      <strong>Fecha:</strong> {display_date}<br/>
      <strong>Hora:</strong> {time} hs<br/>
      <strong>Zonas a tratar:</strong>
      {_zones_list(zones)}
    </mj-text>

    {message_section}

    <mj-text align="center" font-size="18px" font-weight="600" color="{THEME['admin']}" padding="25px 0 10px 0">
      Acciones rápidas
    </mj-text>

    {_calendar_buttons(calendar_links, "Añadir a Google Cal.", "Añadir a Outlook")}

    <mj-text align="center" container-background-color="{THEME['warning_bg']}" color="{THEME['warning_text']}" font-weight="700" padding="15px">
      Acción Requerida: Contactar al cliente para confirmar el turno.
    </mj-text>
    """

    return get_base_template(
        title="Nueva Solicitud de Turno Web",
        preview_text=f"Nueva solicitud de turno de {name}",
        content_sections=content,
        accent=THEME["admin"],
        header_bg=THEME["admin_light"],
        show_footer=False,
    )


def prize_won_template(contact: str, prize: str, validity_days: int) -> str:
    """Prize wheel reward for the user"""
    content = f"""
    <mj-text>
      ¡Gracias por participar en nuestra Ruleta de la Belleza! Has ganado un premio:
    </mj-text>

    <mj-text align="center" font-size="24px" font-weight="700" color="{THEME['primary']}"
      container-background-color="#fff7fa" padding="20px">
      {prize}
    </mj-text>

    <mj-text font-size="18px" font-weight="600" color="{THEME['primary']}" padding="20px 0 0 0">
      ¿Cómo canjear tu premio?
    </mj-text>

    <mj-text>
      Simplemente <strong>mencioná este premio y tu información de contacto ({contact})</strong>
      cuando reserves tu próximo turno o nos contactes por WhatsApp.
    </mj-text>

    <mj-text font-size="14px" color="#713f12" container-background-color="{THEME['warning_bg']}" padding="12px">
      <strong>Importante:</strong> Tu premio tiene una validez de <strong>{validity_days} días</strong>
      a partir de la fecha de emisión de este correo. ¡No te olvides de usarlo!
    </mj-text>

    <mj-text>
      ¡Te esperamos!<br/><strong style="color: {THEME['primary']};">El equipo de {CLINIC_NAME}</strong>
    </mj-text>
    """

    return get_base_template(
        title="¡Felicitaciones!",
        preview_text="¡Ganaste un Premio!",
        content_sections=content,
    )


def lead_admin_notification_template(
    prize: str,
    claimed_at: str,
    expires_on: str,
    email: Optional[str] = None,
    whatsapp: Optional[str] = None,
) -> str:
    """New prize wheel lead notification for the clinic staff"""
    email_html = (
        f'<strong>Email:</strong> <a href="mailto:{email}" style="color: {THEME["admin"]};">{email}</a><br/>'
        if email
        else ""
    )
    whatsapp_html = f"<strong>WhatsApp:</strong> {whatsapp}<br/>" if whatsapp else ""

    content = f"""
    <mj-text>
      Se ha capturado un nuevo lead a través de la ruleta en la página web.
    </mj-text>

    <mj-text font-size="20px" font-weight="600" color="{THEME['admin']}" padding="10px 0">
      Detalles del Lead
    </mj-text>
    <mj-text padding="0">
      <strong>Fecha:</strong> {claimed_at}<br/>
      {email_html}
      {whatsapp_html}
      <strong>Premio Ganado:</strong> {prize}<br/>
      <strong style="color: #c026d3;">Vencimiento del Premio: {expires_on}</strong>
    </mj-text>

    <mj-text align="center" container-background-color="{THEME['success_bg']}" color="{THEME['success_text']}" font-weight="700" padding="15px">
      No se requiere acción inmediata, solo es una notificación.
    </mj-text>
    """

    return get_base_template(
        title="Nuevo Lead: Ruleta de la Belleza",
        preview_text="Nuevo Lead de la Ruleta",
        content_sections=content,
        accent=THEME["admin"],
        header_bg=THEME["admin_light"],
        show_footer=False,
    )


def inquiry_notification_template(name: str, whatsapp: str, message: str) -> str:
    """Contact form relay for the clinic staff"""
    content = f"""
    <mj-text>
      Se ha recibido una nueva consulta a través del formulario web.
    </mj-text>

    <mj-text font-size="20px" font-weight="600" color="{THEME['admin']}" padding="10px 0">
      Datos del Contacto
    </mj-text>
    <mj-text padding="0">
      <strong>Nombre:</strong> {name}<br/>
      <strong>WhatsApp:</strong> {whatsapp}
    </mj-text>

    <mj-text font-size="20px" font-weight="600" color="{THEME['admin']}" padding="20px 0 10px 0">
      Mensaje
    </mj-text>
    <mj-text container-background-color="{THEME['background']}" padding="10px">
      {message}
    </mj-text>

    <mj-text align="center" container-background-color="{THEME['warning_bg']}" color="{THEME['warning_text']}" font-weight="700" padding="15px">
      Acción Requerida: Contactar a la persona por WhatsApp.
    </mj-text>
    """

    return get_base_template(
        title="Nueva Consulta desde la Web",
        preview_text=f"Nueva consulta de {name}",
        content_sections=content,
        accent=THEME["admin"],
        header_bg=THEME["admin_light"],
        show_footer=False,
    )
