#!/usr/bin/env python3
"""
Category classification rules for script setup statements.
Separate file to keep the default rule table organized and maintainable.

Rules are kept in an insertion-ordered mapping: the first category (in
declaration order) owning a matching pattern wins, so the order of this table
is part of the behaviour, not a presentation detail.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

IMPORTS_CATEGORY = "imports"
TYPES_CATEGORY = "types"
DEFAULT_CATEGORY = "app-functions"


@dataclass
class CategoryRule:
    """A single category classification rule."""

    name: str
    patterns: list[str] = field(default_factory=list)
    description: str = ""

    def extended(
        self,
        patterns: list[str],
        description: str | None = None,
    ) -> "CategoryRule":
        """Return a copy with extra patterns appended after the existing ones."""
        return CategoryRule(
            name=self.name,
            patterns=[*self.patterns, *patterns],
            description=description or self.description,
        )

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any] | list[str] | str) -> "CategoryRule":
        """Build a rule from a config entry.

        A bare list (or a single string) is shorthand for ``{patterns: ...}``.
        """
        if not isinstance(data, Mapping):
            data = {"patterns": data}
        patterns = data.get("patterns") or []
        if isinstance(patterns, str):
            patterns = [patterns]
        elif not isinstance(patterns, (list, tuple)):
            logger.warning(f"Ignoring patterns of group {name}: expected a list")
            patterns = []
        return cls(
            name=name,
            patterns=list(patterns),
            description=data.get("description") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {"patterns": list(self.patterns), "description": self.description}


# ============================================================
# ORDER PRESETS
# ============================================================

DEFAULT_ORDER: list[str] = [
    "imports",
    "types",
    "framework-init",
    "stores",
    "ui-libraries",
    "libraries",
    "utils",
    "validation",
    "variables",
    "server-requests",
    "computed-hooks",
    "app-functions",
    "modals",
    "watchers-listeners",
    "app-lifecycle",
]

STRICT_ORDER: list[str] = [
    "framework-init",
    "stores",
    "libraries",
    "variables",
    "computed-hooks",
    "server-requests",
    "app-functions",
    "modals",
    "watchers-listeners",
    "app-lifecycle",
]

ORDER_PRESETS: dict[str, list[str]] = {
    "recommended": DEFAULT_ORDER,
    "strict": STRICT_ORDER,
}


def get_order_preset(name: str) -> list[str]:
    """Return a copy of a named order preset.

    Raises:
        KeyError: If no preset has that name
    """
    return list(ORDER_PRESETS[name])


# ============================================================
# DEFAULT RULES
# ============================================================


def get_default_category_rules() -> dict[str, CategoryRule]:
    """Get the default category rule table, in matching order.

    A fresh table is built on every call so callers may extend it freely.
    """
    rules: dict[str, CategoryRule] = {}

    def add(name: str, description: str, patterns: list[str]) -> None:
        rules[name] = CategoryRule(name=name, patterns=patterns, description=description)

    # Imports are recognised structurally, never by name
    add(IMPORTS_CATEGORY, "Import statements", [])

    add(
        TYPES_CATEGORY,
        "TypeScript types and Vue macros",
        [
            "^(interface|type|enum)",
            "defineProps",
            "defineEmits",
            "defineExpose",
            "defineSlots",
            "withDefaults",
        ],
    )

    # Stores are declared before framework-init so "useAuthStore" is a store,
    # not a match of "useAuth"
    add(
        "stores",
        "Store initialization",
        [
            # Pinia
            ".*Store",
            "usePinia",
            "useStore",
            "defineStore",
            "createPinia",
            "setActivePinia",
            "mapStores",
            "mapState",
            "mapGetters",
            "mapActions",
            "mapWritableState",
            # Other state management
            "useGlobalState",
            "useState",
            "useSharedState",
            "createGlobalState",
        ],
    )

    add(
        "framework-init",
        "Framework initialization functions",
        [
            # Vue 3 / Nuxt 3 core
            "useRoute",
            "useRouter",
            "useNuxtApp",
            "useCookie",
            "useRuntimeConfig",
            "useAppConfig",
            "useRequestHeaders",
            "useRequestEvent",
            "useRequestURL",
            "useRequestFetch",
            # SEO & meta
            "useHead",
            "useSeoMeta",
            "useServerSeoMeta",
            "useHeadSafe",
            # Internationalization
            "useLocalePath",
            "useI18n",
            "useSwitchLocalePath",
            "useLocaleRoute",
            "useNuxtI18n",
            # Auth & session
            "useSupabaseAuth",
            "useSupabaseAuthClient",
            "useSupabaseUser",
            "useAuth",
            "useAuthState",
            "useAuthUser",
            "useSession",
            "useSessionState",
            # Device & platform
            "useDevice",
            "useUserAgent",
            "useColorMode",
            "usePreferredDark",
            "useMediaQuery",
            # Hydration
            "useHydration",
            "useSSRContext",
        ],
    )

    add(
        "ui-libraries",
        "UI libraries and components",
        [
            "useModal",
            "useVuelidate",
            "useForm",
            "useField",
            "useFormContext",
            "useToast",
            "useNotification",
            "useDialog",
            "useConfirm",
            "useDrawer",
            "useSidebar",
            "useDropdown",
            "usePopover",
            "useTooltip",
            "useAccordion",
            "useTabs",
            "useCarousel",
            "useSlider",
            "useDatePicker",
            "useTimePicker",
            "useColorPicker",
            "useFileUpload",
            "useDragAndDrop",
            "useResizable",
            "useSortable",
            "useVirtualList",
            "useInfiniteScroll",
            "usePagination",
            "useTable",
            "useDataTable",
            "useTree",
            "useContextMenu",
            # Charts
            "useChart",
            "useECharts",
            "useChartJS",
            "useApexCharts",
            # Maps
            "useMap",
            "useLeaflet",
            "useGoogleMaps",
            # Calendars
            "useCalendar",
            "useFullCalendar",
            # Rich text editors
            "useEditor",
            "useTipTap",
            "useQuill",
            "useMonaco",
        ],
    )

    add(
        "libraries",
        "Library and Vue composition API",
        [
            # Vue 3 composition API
            "reactive",
            "ref",
            "readonly",
            "shallowRef",
            "shallowReactive",
            "toRef",
            "toRefs",
            "toRaw",
            "markRaw",
            "unref",
            "isRef",
            "isReactive",
            "isReadonly",
            "isProxy",
            "nextTick",
            "watchEffect",
            "watchPostEffect",
            "watchSyncEffect",
            "effectScope",
            "getCurrentScope",
            "onScopeDispose",
            "inject",
            "provide",
            "hasInjectionContext",
            "customRef",
            "triggerRef",
            "shallowReadonly",
            # VueUse core
            "useCounter",
            "useToggle",
            "useBoolean",
            "useClipboard",
            "useTitle",
            "useFavicon",
            "useFullscreen",
            "usePermission",
            "useShare",
            "useNetwork",
            "useOnline",
            "useBattery",
            "useGeolocation",
            "useStorage",
            "useLocalStorage",
            "useSessionStorage",
            "useCookies",
            "useVModel",
            "useVModels",
        ],
    )

    add(
        "utils",
        "Utility functions and helpers",
        [
            "use[A-Z][a-zA-Z]*Utils?",
            "use[A-Z][a-zA-Z]*Helper",
            "use[A-Z][a-zA-Z]*Service",
            "use[A-Z][a-zA-Z]*Formatter",
            "use[A-Z][a-zA-Z]*Parser",
            "use[A-Z][a-zA-Z]*Converter",
            "useDebounce",
            "useThrottle",
            "useMemoize",
            "useClamp",
            "useRandom",
            "useUuid",
            "createUtils?",
            "createHelper",
            "createService",
            "formatDate",
            "formatCurrency",
            "formatNumber",
            "debounce",
            "throttle",
            "clamp",
            "random",
            "uuid",
            "generateId",
            "slugify",
            "capitalize",
            "truncate",
            "sanitize",
            "^(processUser|processData|formatUser|parseData|validateInput|transformValue)$",
        ],
    )

    add(
        "validation",
        "Validation libraries and schemas",
        [
            "useVuelidate",
            "useSchema",
            "useValidation",
            "useValidator",
            "useValidationSchema",
            "useValidationRules",
            "useYup",
            "useZod",
            "useJoi",
            "validate",
            "validateForm",
            "validateField",
            "validateEmail",
            "validatePassword",
            "validatePhone",
            "validateURL",
            "validateRequired",
            "createValidator",
        ],
    )

    add(
        "variables",
        "Variables and reactive data",
        [
            "^(message|loading|data|config|options|dateRange|buttonOptions|isLoading|isError"
            "|error|result|response|payload|params|query|body|headers|status|state|form"
            "|formData|formState)$",
            "^(show|hide|open|close|active|inactive|visible|hidden|enabled|disabled|selected"
            "|checked|expanded|collapsed)$",
            "^(current|selected|active|focused|hovered|pressed|loading|pending|success|error"
            "|warning|info)$",
            "^(items|list|data|collection|records|entries|results|values|keys|options|choices"
            "|selections|blocks)$",
            "^(text|content|value|name|title|label|description|message|note|comment)$",
            "^(variableValue|someVariable|dynamicValue|processedValue|userValue|itemValue)$",
        ],
    )

    add(
        "computed-hooks",
        "Computed properties and custom hooks",
        [
            "computed",
            "computedAsync",
            "computedEager",
            "computedWithControl",
            # Custom composables
            "useFilter",
            "useSort",
            "useSearch",
            "usePaginate",
            "useGroupBy",
            "useMap",
            "useReduce",
            "useFind",
            # Derived state
            "useDerivedState",
            "useComputedState",
            "useCalculatedValue",
            "useTransformedData",
            "useMappedData",
            "useFilteredData",
            "useSortedData",
            "useGroupedData",
            "usePaginatedData",
        ],
    )

    add(
        "server-requests",
        "Server requests and data fetching",
        [
            # Nuxt 3 data fetching
            "useAsyncData",
            "useLazyAsyncData",
            "useFetch",
            "useLazyFetch",
            "\\$fetch",
            "refresh",
            "refreshCookie",
            "clearNuxtData",
            "clearNuxtState",
            # Fetch composables
            "useFetchData",
            "useApiCall",
            "useHttpClient",
            "useRestApi",
            "useGraphQLQuery",
            "useSubscription",
            "useMutation",
            "useQuery",
            "useInfiniteQuery",
            "usePrefetch",
            "usePreload",
            # Request caching
            "useSWR",
            "useStaleWhileRevalidate",
            "useCache",
            "useCachedAsyncData",
            "useCachedFetch",
        ],
    )

    add(
        DEFAULT_CATEGORY,
        "Application functions and event handlers",
        [
            # Event handlers
            "^handle[A-Z].*",
            "^on(Click|Submit|Change|Input|Focus|Blur|Key|Mouse|Touch|Drag|Drop|Scroll"
            "|Resize|Load|Error)[A-Z].*",
            "^(click|submit|change|input|focus|blur|keydown|keyup|keypress|mousedown|mouseup"
            "|scroll|resize)[A-Z].*",
            # CRUD
            "^(create|add|insert)[A-Z].*",
            "^(read|get|fetch|load|retrieve)[A-Z].*",
            "^(update|edit|modify|change|set)[A-Z].*",
            "^(delete|remove|destroy|clear)[A-Z].*",
            # Navigation
            "^(navigate|goto|redirect|push|replace|back|forward)[A-Z].*",
            # Forms
            "^(validate|submit|reset|clear|populate)[A-Z].*",
            "^(save|cancel|edit|preview)[A-Z].*",
            # Modal and dialog operations
            "^(open|close|show|hide|toggle)[A-Z].*",
            "^(confirm|prompt|alert)[A-Z].*",
            # Data manipulation
            "^(filter|sort|group|search|paginate)[A-Z].*",
            "^(transform|map|reduce|aggregate)[A-Z].*",
            # UI state
            "^(toggle|switch|activate|deactivate|enable|disable)[A-Z].*",
            "^(select|deselect|check|uncheck|expand|collapse)[A-Z].*",
        ],
    )

    add(
        "modals",
        "Modal windows, dialogs, and overlay functions",
        [
            "^(open|close|show|hide|toggle)[A-Z].*[Mm]odal.*",
            "^(open|close|show|hide|toggle)[A-Z].*[Dd]ialog.*",
            "^(open|close|show|hide|toggle)[A-Z].*[Pp]opup.*",
            "^(open|close|show|hide|toggle)[A-Z].*[Dd]rawer.*",
            "^(open|close|show|hide|toggle)[A-Z].*[Ss]idebar.*",
            "^(open|close|show|hide|toggle)[A-Z].*[Pp]anel.*",
            "^(open|close|show|hide|toggle)[A-Z].*[Oo]verlay.*",
            "^(open|close|show|hide)[A-Z].*[Cc]onfirm.*",
            "^(open|close|show|hide)[A-Z].*[Aa]lert.*",
            "^(open|close|show|hide)[A-Z].*[Pp]rompt.*",
            "^(open|close|show|hide)[A-Z].*[Cc]reate.*",
            "^(open|close|show|hide)[A-Z].*[Ee]dit.*",
            "^(open|close|show|hide)[A-Z].*[Dd]elete.*",
            "^(open|close|show|hide)[A-Z].*[Vv]iew.*",
            "^(open|close|show|hide)[A-Z].*[Pp]review.*",
            "^(open|close|show|hide)[A-Z].*[Ss]ettings.*",
            "^(show|hide|toggle|set)[A-Z].*[Mm]odal",
            "^modal[A-Z].*",
            "^dialog[A-Z].*",
            "^popup[A-Z].*",
            "^drawer[A-Z].*",
            "^sidebar[A-Z].*",
            "^overlay[A-Z].*",
        ],
    )

    add(
        "watchers-listeners",
        "Watchers, observers, and event listeners",
        [
            "watch",
            "watchEffect",
            "watchPostEffect",
            "watchSyncEffect",
            "watchIgnorable",
            "watchOnce",
            "watchDeep",
            "watchImmediate",
            "watchThrottled",
            "watchDebounced",
            # Event listeners
            "addEventListener",
            "removeEventListener",
            "useEventListener",
            "useDocumentListener",
            "useWindowListener",
            "useGlobalEventListener",
            "^(listen|unlisten|subscribe|unsubscribe)[A-Z].*",
            "^(on|off|emit|trigger)[A-Z].*",
            # DOM observers
            "useResizeObserver",
            "useMutationObserver",
            "useIntersectionObserver",
            # Device events
            "useMediaQuery",
            "useBreakpoints",
            "useDeviceOrientation",
            "useGeolocation",
            "useBattery",
            "useNetwork",
            "useOnline",
            "useFocus",
            "useActiveElement",
            "useMouse",
            "useKeyModifier",
            "useMagicKeys",
        ],
    )

    add(
        "app-lifecycle",
        "App lifecycle, SEO, and framework hooks",
        [
            # Vue lifecycle hooks
            "onBeforeMount",
            "onMounted",
            "onBeforeUpdate",
            "onUpdated",
            "onBeforeUnmount",
            "onUnmounted",
            "onActivated",
            "onDeactivated",
            "onErrorCaptured",
            # Nuxt hooks
            "onBeforeRouteLeave",
            "onBeforeRouteUpdate",
            "definePageMeta",
            "defineRouteRules",
            "defineNuxtConfig",
            "defineNuxtPlugin",
            "defineAppConfig",
            # SEO & meta
            "useSeoMeta",
            "useServerSeoMeta",
            "useHead",
            "useHeadSafe",
            # Error handling
            "useErrorHandler",
            "useGlobalErrorHandler",
            "useAsyncErrorHandler",
            "useErrorBoundary",
            # Performance
            "usePreload",
            "usePrefetch",
            "useLazyHydration",
            "useHydration",
            "useSSR",
            "useClientOnly",
            "useAsyncComponent",
        ],
    )

    return rules


def merge_category_rules(
    default_rules: Mapping[str, CategoryRule],
    user_rules: Mapping[str, CategoryRule | Mapping[str, Any]] | None = None,
) -> dict[str, CategoryRule]:
    """Merge user-supplied rules into the default table.

    Same-name rules keep the default patterns first and append the user's;
    the description is replaced only when the user supplies one. New rules
    are appended after the defaults, in the user's order.

    Args:
        default_rules: Base rule table (not modified)
        user_rules: Rules as ``CategoryRule`` objects or ``{patterns, description}`` mappings

    Returns:
        dict[str, CategoryRule]: The merged table
    """
    merged = dict(default_rules)
    if not user_rules:
        return merged

    for name, user_rule in user_rules.items():
        if user_rule is None:
            user_rule = {}
        if not isinstance(user_rule, (CategoryRule, Mapping, list, tuple, str)):
            logger.warning(f"Ignoring group {name}: expected a mapping or a list of patterns")
            continue
        if not isinstance(user_rule, CategoryRule):
            user_rule = CategoryRule.from_dict(name, user_rule)

        if name in merged:
            merged[name] = merged[name].extended(user_rule.patterns, user_rule.description)
        else:
            merged[name] = CategoryRule(
                name=name,
                patterns=list(user_rule.patterns),
                description=user_rule.description or f"Custom group: {name}",
            )

    return merged
