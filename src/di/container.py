from dependency_injector import containers, providers
from clients.supabase_client import SupabaseClient
from ui.auth_page import AuthPage
from ui.chat_page import ChatPage
from ui.notification_feed import NotificationFeed
from ui.public_map_page import PublicMapPage
from ui.publish_panel import PublishPanel
from workflows.publish_workflow import PublishWorkflow
from config.config import SETTINGS


class Container(containers.DeclarativeContainer):
    # Clients
    supabase_client = providers.Singleton(
        SupabaseClient,
        url=SETTINGS.supabase_url,
        key=SETTINGS.supabase_anon_key,
    )

    # Workflows
    publish_workflow = providers.Singleton(
        PublishWorkflow,
        supabase_client=supabase_client,
        location_decimals=SETTINGS.location_decimals,
    )

    # UI Components
    publish_panel = providers.Singleton(
        PublishPanel,
        publish_workflow=publish_workflow,
        location_decimals=SETTINGS.location_decimals,
    )
    notification_feed = providers.Singleton(
        NotificationFeed,
        supabase_client=supabase_client,
        poll_seconds=SETTINGS.notifications_poll_seconds,
    )

    # UI Pages
    auth_page = providers.Singleton(AuthPage, supabase_client=supabase_client)
    chat_page = providers.Singleton(
        ChatPage, supabase_client=supabase_client, publish_panel=publish_panel
    )
    public_map_page = providers.Singleton(
        PublicMapPage,
        supabase_client=supabase_client,
        posts_limit=SETTINGS.public_posts_limit,
        cluster_decimals=SETTINGS.cluster_decimals,
        default_center=(SETTINGS.map_default_lat, SETTINGS.map_default_lng),
        zoom=SETTINGS.map_zoom,
    )
