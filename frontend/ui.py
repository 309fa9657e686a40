"""
Streamlit frontend for Acelera Leads.

Calls POST {LEADS_API_URL}/search and renders every lead as a card with
Instagram and WhatsApp buttons. Search state lives in st.session_state
and is replaced wholesale by each new search.
"""

from typing import Any
from urllib.parse import quote, urlencode

import requests
import streamlit as st

from leads import config
from leads.errors import GENERIC_MESSAGE, friendly_error_message
from leads.models import SearchFilters, SearchState

SEARCH_URL  = f"{config.API_URL}/search"
GREETING    = "Olá, vim pelo Acelera Leads!"
NO_BIO_TEXT = "Biografia não disponível."
CARD_COLUMNS = 3


# ---------------------------------------------------------------------------
# Helpers (pure, tested)
# ---------------------------------------------------------------------------

def avatar_url(profile: dict[str, Any]) -> str:
    """Profile picture, or a generated initials avatar when the model found none."""
    if profile.get("profile_pic"):
        return profile["profile_pic"]
    params = urlencode({
        "name": profile.get("name", ""),
        "background": "1e293b",
        "color": "cbd5e1",
        "size": "150",
    })
    return f"https://ui-avatars.com/api/?{params}"


def whatsapp_link(profile: dict[str, Any]) -> tuple[str, bool]:
    """Return (link, found_in_bio). Falls back to the default contact number."""
    if profile.get("whatsapp"):
        return profile["whatsapp"], True
    return f"https://wa.me/{config.FALLBACK_WHATSAPP}?text={quote(GREETING)}", False


def run_search(keyword: str, filters: SearchFilters) -> tuple[list[dict[str, Any]], str | None]:
    """POST the search; return (profiles, error message for the user)."""
    payload: dict[str, Any] = {"keyword": keyword, **filters.model_dump(exclude_none=True)}

    try:
        resp = requests.post(SEARCH_URL, json=payload, timeout=120)
    except requests.exceptions.ConnectionError:
        return [], "Não foi possível conectar à API. Inicie-a com: python app/app.py"
    except requests.exceptions.RequestException:
        return [], GENERIC_MESSAGE

    if not resp.ok:
        try:
            detail = str(resp.json().get("detail", ""))
        except ValueError:
            detail = resp.text
        if resp.status_code == 429:
            detail = f"429 {detail}"
        return [], friendly_error_message(detail)

    try:
        return resp.json().get("profiles", []), None
    except ValueError:
        return [], GENERIC_MESSAGE


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_card(profile: dict[str, Any]) -> None:
    with st.container(border=True):
        top_left, top_right = st.columns([1, 1])
        top_left.image(avatar_url(profile), width=64)
        if profile.get("followers"):
            top_right.markdown(f"👥 **{profile['followers']}**")

        st.markdown(f"**{profile['name']}**")
        st.markdown(f"[@{profile['username']}]({profile['instagram_url']})")
        st.caption(profile.get("bio") or NO_BIO_TEXT)

        link, found = whatsapp_link(profile)
        left, right = st.columns(2)
        left.link_button("Instagram", profile["instagram_url"], use_container_width=True)
        right.link_button(
            "WhatsApp",
            link,
            help="Número encontrado na bio" if found else "Link padrão",
            type="primary" if found else "secondary",
            use_container_width=True,
        )


def _render_results(profiles: list[dict[str, Any]], keyword: str, state: SearchState) -> None:
    if state.error:
        st.error(f"**Ops, algo deu errado**\n\n{state.error}")
        return

    if not state.has_searched:
        return

    if not profiles:
        st.info("Nenhum perfil encontrado. Tente palavras-chave mais específicas ou reduza os filtros.")
        return

    st.subheader(f"{len(profiles)} resultados encontrados para \"{keyword}\"")
    columns = st.columns(CARD_COLUMNS)
    for i, profile in enumerate(profiles):
        with columns[i % CARD_COLUMNS]:
            _render_card(profile)


def _search(keyword: str, filters: SearchFilters) -> None:
    st.session_state.search_state = st.session_state.search_state.started()
    st.session_state.keyword = keyword
    st.session_state.profiles = []

    with st.spinner("Buscando…"):
        profiles, error = run_search(keyword, filters)

    st.session_state.profiles = profiles
    st.session_state.search_state = st.session_state.search_state.finished(error)


def main() -> None:
    st.set_page_config(page_title="Acelera Leads", layout="wide")
    st.session_state.setdefault("search_state", SearchState())
    st.session_state.setdefault("profiles", [])
    st.session_state.setdefault("keyword", "")

    st.title("Acelera Leads")
    st.markdown(
        "Digite uma profissão ou palavra-chave e nossa IA buscará perfis reais, "
        "analisando bios e extraindo contatos automaticamente."
    )

    loading = st.session_state.search_state.loading

    with st.form("search"):
        keyword = st.text_input(
            "Profissão ou nicho",
            placeholder="Ex: Tatuador em São Paulo, Advogado...",
            disabled=loading,
        )
        submitted = st.form_submit_button("Buscar", disabled=loading)

    min_followers = st.session_state.get("min_followers", "")
    max_followers = st.session_state.get("max_followers", "")
    bio_keyword   = st.session_state.get("bio_keyword", "")
    current = SearchFilters(min_followers=min_followers, max_followers=max_followers, bio_keyword=bio_keyword)

    label = "Filtros Avançados" + ("  · Ativo" if current.is_active() else "")
    with st.expander(label):
        left, right = st.columns(2)
        left.text_input("Mínimo de Seguidores", placeholder="Ex: 1000", key="min_followers")
        right.text_input("Máximo de Seguidores", placeholder="Ex: 10000", key="max_followers")
        st.text_input(
            "Palavra-chave na Bio",
            placeholder="Ex: Especialista, Premiado, Atendimento 24h, Presencial...",
            key="bio_keyword",
        )

    filters = SearchFilters(
        min_followers=st.session_state.min_followers,
        max_followers=st.session_state.max_followers,
        bio_keyword=st.session_state.bio_keyword,
    )

    st.caption("Sugestões:")
    chosen = None
    for col, suggestion in zip(st.columns(3), config.SUGGESTED_KEYWORDS[:3]):
        if col.button(suggestion, disabled=loading, use_container_width=True):
            chosen = suggestion

    if chosen:
        _search(chosen, filters)
    elif submitted:
        if not keyword.strip():
            st.warning("Digite uma palavra-chave para buscar.")
        else:
            _search(keyword.strip(), filters)

    _render_results(
        st.session_state.profiles,
        st.session_state.keyword,
        st.session_state.search_state,
    )
